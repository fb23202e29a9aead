"""
Clone Agent - Exports a live Firebase project as a Terraform configuration.

This module provides functionality to snapshot:
- Enabled Google APIs and the project resource
- The Firestore database and its security rules
- Firestore documents (as google_firestore_document resources)
- The google.com identity provider configuration

The generated document can be applied with Terraform to provision a clone
of the origin project.
"""

__version__ = "0.1.0"
__author__ = "Clone Agent Team"

from .config import CloneConfig
from .errors import (
    CloneError,
    ConfigurationError,
    FragmentCollisionError,
    RulesetShapeError,
)
from .terraform import (
    ExportMetadata,
    ResourceFragment,
    TerraformExportGenerator,
)

__all__ = [
    "CloneConfig",
    "CloneError",
    "ConfigurationError",
    "ExportMetadata",
    "FragmentCollisionError",
    "ResourceFragment",
    "RulesetShapeError",
    "TerraformExportGenerator",
    "__version__",
]
