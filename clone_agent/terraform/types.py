"""
Type definitions for the Terraform export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

CATEGORIES: Tuple[str, ...] = ("terraform", "locals", "provider", "resource")

T = TypeVar("T")


@dataclass
class ExportMetadata:
    """Inputs that describe the project the document will provision."""
    project_id: str
    origin_project_id: str
    project_display_name: str
    region: str
    location_id: str
    zone: str
    apis: List[str] = field(default_factory=list)
    folder_id: Optional[str] = None
    org_id: Optional[str] = None

    def unique_apis(self) -> List[str]:
        """API identifiers with duplicates removed, first occurrence wins."""
        return list(dict.fromkeys(self.apis))


@dataclass
class ResourceFragment:
    """
    One named declaration in the Terraform document.

    ``type`` and ``name`` are optional: the ``terraform`` and ``locals`` blocks
    sit directly under their category, and provider configurations have a type
    (``google``) but no name.
    """
    category: str
    type: Optional[str] = None
    name: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> Tuple[str, ...]:
        """Path of this fragment in the document."""
        return tuple(part for part in (self.category, self.type, self.name) if part)


@dataclass(frozen=True)
class Fetched(Generic[T]):
    """Optional live data that was retrieved."""
    value: T


@dataclass(frozen=True)
class Unavailable:
    """Optional live data that could not be retrieved."""
    reason: str


FetchResult = Union[Fetched, Unavailable]

Document = Dict[str, Dict[str, Any]]
