"""Async clients for the Google APIs read while cloning a project."""

from .base import GoogleApiClient, RateLimiter
from .firebase import FirebaseManagementClient
from .firestore import FirestoreClient, database_path
from .identity_toolkit import GOOGLE_IDP_ID, IdentityToolkitClient
from .rules import RulesClient, RulesetFile

__all__ = [
    "FirebaseManagementClient",
    "FirestoreClient",
    "GOOGLE_IDP_ID",
    "GoogleApiClient",
    "IdentityToolkitClient",
    "RateLimiter",
    "RulesClient",
    "RulesetFile",
    "database_path",
]
