"""
Terraform export generator.

Combines the static blocks, the locals block and the live collectors into a
single document and writes it to disk.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Union

from clone_agent.clients.firestore import FirestoreClient
from clone_agent.clients.identity_toolkit import IdentityToolkitClient

from .assembler import assemble_document
from .collectors import FirestoreContentCollector, IdentityProviderCollector
from .locals import build_locals, parent_kind
from .serializer import serialize, write_text_atomic
from .templates import static_fragments
from .types import Document, ExportMetadata


class TerraformExportGenerator:
    """
    Builds the Terraform document for a project clone.

    Usage:
        generator = TerraformExportGenerator(firestore_client, identity_client)
        document = await generator.build_document(metadata)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        identity_client: IdentityToolkitClient,
        max_list_pages: int = 1,
    ):
        self.content_collector = FirestoreContentCollector(firestore_client, max_pages=max_list_pages)
        self.idp_collector = IdentityProviderCollector(identity_client)
        self.logger = logging.getLogger(f"{__name__}.TerraformExportGenerator")

    async def build_document(self, metadata: ExportMetadata) -> Document:
        """
        Collect live state and assemble the document.

        Both collectors read from the origin project.

        Raises:
            httpx.HTTPError: Listing the origin project's Firestore content failed
            FragmentCollisionError: Two sources produced the same fragment
        """
        locals_fragment = build_locals(metadata)

        # The two collectors share no state, so they run side by side; both
        # are awaited before a content failure is re-raised.
        content, idp = await asyncio.gather(
            self.content_collector.collect(metadata.origin_project_id),
            self.idp_collector.collect(metadata.origin_project_id),
            return_exceptions=True,
        )
        for outcome in (content, idp):
            if isinstance(outcome, BaseException):
                raise outcome

        document = assemble_document(
            static_fragments(parent_kind(metadata)),
            [locals_fragment],
            content,
            [idp],
        )
        self.logger.info(
            f"Built Terraform document for {metadata.project_id} "
            f"({len(content)} Firestore documents)"
        )
        return document

    async def generate(self, metadata: ExportMetadata, output_path: Union[str, Path]) -> Path:
        """Build the document and write it to ``output_path``."""
        document = await self.build_document(metadata)
        return write_text_atomic(output_path, serialize(document))
