"""
Terraform export of a Firebase project.

Static blocks, the locals block and live collector output are merged into
one Terraform JSON document.
"""

from .assembler import assemble_document
from .collectors import (
    PLACEHOLDER_CREDENTIAL,
    FirestoreContentCollector,
    IdentityProviderCollector,
    idp_fragment,
)
from .generator import TerraformExportGenerator
from .locals import build_locals
from .serializer import serialize, write_text_atomic
from .templates import FALLBACK_FOLDER_ID, static_fragments
from .types import (
    CATEGORIES,
    Document,
    ExportMetadata,
    Fetched,
    FetchResult,
    ResourceFragment,
    Unavailable,
)

__all__ = [
    "CATEGORIES",
    "Document",
    "ExportMetadata",
    "FALLBACK_FOLDER_ID",
    "Fetched",
    "FetchResult",
    "FirestoreContentCollector",
    "IdentityProviderCollector",
    "PLACEHOLDER_CREDENTIAL",
    "ResourceFragment",
    "TerraformExportGenerator",
    "Unavailable",
    "assemble_document",
    "build_locals",
    "idp_fragment",
    "serialize",
    "static_fragments",
    "write_text_atomic",
]
