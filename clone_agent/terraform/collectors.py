"""
Collectors that turn live project state into Terraform fragments.

Firestore content is mandatory: any API error propagates and aborts the
export. The identity provider is optional: any failure is replaced with
placeholder credentials.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from clone_agent.clients.firestore import DEFAULT_DATABASE, FirestoreClient, database_path
from clone_agent.clients.identity_toolkit import GOOGLE_IDP_ID, IdentityToolkitClient

from .templates import APP_ENGINE_ADDRESS, GOOGLE_BETA_PROVIDER, GOOGLE_PROVIDER, PROJECT_ID_REF
from .types import Fetched, FetchResult, ResourceFragment, Unavailable

logger = logging.getLogger(__name__)

FIRESTORE_DOCUMENT_TYPE = "google_firestore_document"
IDP_CONFIG_TYPE = "google_identity_platform_default_supported_idp_config"
IDP_FRAGMENT_NAME = "google_com"
PLACEHOLDER_CREDENTIAL = "PLACEHOLDER"


def document_id_from_name(name: str) -> str:
    """Trailing path segment of a Firestore document resource name."""
    return name.rstrip("/").rsplit("/", 1)[-1]


def document_fragment(ordinal: int, collection_id: str, document: Dict[str, Any]) -> ResourceFragment:
    """Map one Firestore document to one google_firestore_document fragment."""
    return ResourceFragment(
        "resource",
        FIRESTORE_DOCUMENT_TYPE,
        f"document_{ordinal}",
        {
            "provider": GOOGLE_PROVIDER,
            "project": PROJECT_ID_REF,
            "database": DEFAULT_DATABASE,
            "collection": collection_id,
            "document_id": document_id_from_name(document["name"]),
            "fields": json.dumps(document.get("fields", {})),
            "depends_on": [APP_ENGINE_ADDRESS],
        },
    )


class FirestoreContentCollector:
    """
    Export the top-level Firestore documents of the origin project.

    Fragment names come from one counter shared by every collection of a
    collect() call, starting at 1. Names are not stable across runs if the
    live listing order changes.
    """

    def __init__(self, client: FirestoreClient, max_pages: int = 1):
        """
        Args:
            client: Firestore REST client authorized for the origin project
            max_pages: Pages fetched per listing (0 = all); see FirestoreClient
        """
        self.client = client
        self.max_pages = max_pages
        self.logger = logging.getLogger(f"{__name__}.FirestoreContentCollector")

    async def collect(self, origin_project_id: str) -> List[ResourceFragment]:
        db_path = database_path(origin_project_id)
        collection_ids = await self.client.list_collection_ids(db_path, max_pages=self.max_pages)
        self.logger.info(f"Found {len(collection_ids)} collections in {origin_project_id}")

        fragments: List[ResourceFragment] = []
        ordinal = 1
        for collection_id in collection_ids:
            documents = await self.client.list_documents(
                db_path, collection_id, max_pages=self.max_pages
            )
            self.logger.debug(f"Collection {collection_id}: {len(documents)} documents")
            for document in documents:
                fragments.append(document_fragment(ordinal, collection_id, document))
                ordinal += 1

        self.logger.info(f"Exported {len(fragments)} Firestore documents")
        return fragments


def idp_fragment(result: FetchResult) -> ResourceFragment:
    """
    Map an identity provider lookup to its fragment.

    The provider is always declared enabled, even when the origin project never
    configured it, so the clone always carries a block to fill in.
    """
    if isinstance(result, Fetched):
        client_id = result.value.get("clientId", PLACEHOLDER_CREDENTIAL)
        client_secret = result.value.get("clientSecret", PLACEHOLDER_CREDENTIAL)
    else:
        client_id = PLACEHOLDER_CREDENTIAL
        client_secret = PLACEHOLDER_CREDENTIAL

    return ResourceFragment(
        "resource",
        IDP_CONFIG_TYPE,
        IDP_FRAGMENT_NAME,
        {
            "provider": GOOGLE_BETA_PROVIDER,
            "project": PROJECT_ID_REF,
            "idp_id": GOOGLE_IDP_ID,
            "client_id": client_id,
            "client_secret": client_secret,
            "enabled": True,
        },
    )


class IdentityProviderCollector:
    """Export the google.com sign-in provider, degrading to placeholders."""

    def __init__(self, client: IdentityToolkitClient, idp_id: str = GOOGLE_IDP_ID):
        self.client = client
        self.idp_id = idp_id
        self.logger = logging.getLogger(f"{__name__}.IdentityProviderCollector")

    async def fetch(self, project_id: str) -> FetchResult:
        # Every failure kind is treated the same; the lookup is optional.
        try:
            config = await self.client.get_default_supported_idp_config(project_id, self.idp_id)
        except Exception as e:
            self.logger.warning(
                f"Could not read {self.idp_id} provider for {project_id}, "
                f"using placeholder credentials: {e}"
            )
            return Unavailable(reason=str(e))
        if not isinstance(config, dict):
            self.logger.warning(
                f"Unexpected {self.idp_id} provider response for {project_id}, "
                f"using placeholder credentials: {config!r}"
            )
            return Unavailable(reason=f"unexpected response body: {config!r}")
        return Fetched(config)

    async def collect(self, project_id: str) -> ResourceFragment:
        return idp_fragment(await self.fetch(project_id))
