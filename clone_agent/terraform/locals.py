"""Builds the ``locals`` block every other fragment interpolates from."""

from __future__ import annotations

from .templates import FALLBACK_FOLDER_ID, PARENT_FOLDER, PARENT_ORGANIZATION
from .types import ExportMetadata, ResourceFragment


def parent_kind(metadata: ExportMetadata) -> str:
    """Which parent the project resource should reference."""
    return PARENT_ORGANIZATION if metadata.org_id else PARENT_FOLDER


def build_locals(metadata: ExportMetadata) -> ResourceFragment:
    """
    Build the locals fragment for an export.

    The API list is deduplicated; order follows first occurrence so repeated
    runs emit the same list.
    """
    values = {
        "project": metadata.project_id,
        "project_display_name": metadata.project_display_name,
    }
    if parent_kind(metadata) == PARENT_ORGANIZATION:
        values["org_id"] = metadata.org_id
    else:
        values["folder_id"] = metadata.folder_id or FALLBACK_FOLDER_ID
    values.update(
        {
            "location_id": metadata.location_id,
            "region": metadata.region,
            "zone": metadata.zone,
            "apis": metadata.unique_apis(),
        }
    )
    return ResourceFragment(category="locals", attributes=values)
