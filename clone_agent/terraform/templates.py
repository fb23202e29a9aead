"""
Static Terraform blocks shared by every project clone.

Every value that depends on the export is read through a ``${local.*}`` or
resource interpolation token; nothing here performs I/O.
"""

from __future__ import annotations

from typing import List

from .types import ResourceFragment

# Project creation fails when no parent is given and the caller cannot create
# projects at the organization root, so clones land in this folder unless
# --folder or --organization says otherwise. Not portable across accounts.
FALLBACK_FOLDER_ID = "1095975223327"

PARENT_FOLDER = "folder"
PARENT_ORGANIZATION = "organization"

GOOGLE_PROVIDER = "google"
GOOGLE_BETA_PROVIDER = "google-beta"

PROJECT_ID_REF = "${google_project.default.project_id}"
APP_ENGINE_ADDRESS = "google_app_engine_application.appengine"
RULES_FILE_NAME = "firestore.rules"
FIRESTORE_RULES_SERVICE = "cloud.firestore"


def terraform_block() -> ResourceFragment:
    return ResourceFragment(
        category="terraform",
        attributes={
            "required_version": ">= 0.12.0",
            "required_providers": {
                GOOGLE_PROVIDER: {"source": "hashicorp/google"},
                GOOGLE_BETA_PROVIDER: {"source": "hashicorp/google-beta"},
            },
        },
    )


def provider_blocks() -> List[ResourceFragment]:
    """Default provider plus the elevated one billed to the user project."""
    common = {
        "project": "${local.project}",
        "region": "${local.region}",
        "zone": "${local.zone}",
    }
    return [
        ResourceFragment("provider", GOOGLE_PROVIDER, attributes=dict(common)),
        ResourceFragment(
            "provider",
            GOOGLE_BETA_PROVIDER,
            attributes={**common, "user_project_override": True},
        ),
    ]


def project_resource(parent: str = PARENT_FOLDER) -> ResourceFragment:
    if parent == PARENT_ORGANIZATION:
        parent_attr = {"org_id": "${local.org_id}"}
    elif parent == PARENT_FOLDER:
        parent_attr = {"folder_id": "${local.folder_id}"}
    else:
        raise ValueError(f"Unknown project parent kind: {parent}")
    return ResourceFragment(
        "resource",
        "google_project",
        "default",
        {
            "provider": GOOGLE_PROVIDER,
            **parent_attr,
            "name": "${local.project_display_name}",
            "project_id": "${local.project}",
        },
    )


def project_services_resource() -> ResourceFragment:
    return ResourceFragment(
        "resource",
        "google_project_service",
        "services",
        {
            "provider": GOOGLE_PROVIDER,
            "project": PROJECT_ID_REF,
            "disable_on_destroy": False,
            "for_each": "${toset(local.apis)}",
            "service": "${each.key}",
        },
    )


def app_engine_application_resource() -> ResourceFragment:
    return ResourceFragment(
        "resource",
        "google_app_engine_application",
        "appengine",
        {
            "project": PROJECT_ID_REF,
            "location_id": "${local.location_id}",
            "database_type": "CLOUD_FIRESTORE",
        },
    )


def firebase_project_resource() -> ResourceFragment:
    return ResourceFragment(
        "resource",
        "google_firebase_project",
        "default",
        {
            "provider": GOOGLE_BETA_PROVIDER,
            "project": PROJECT_ID_REF,
        },
    )


def firestore_ruleset_resource() -> ResourceFragment:
    return ResourceFragment(
        "resource",
        "google_firebaserules_ruleset",
        "firestore",
        {
            "provider": GOOGLE_BETA_PROVIDER,
            "project": PROJECT_ID_REF,
            "source": {
                "files": {
                    "name": RULES_FILE_NAME,
                    "content": f'${{file("{RULES_FILE_NAME}")}}',
                },
            },
        },
    )


def firestore_release_resource() -> ResourceFragment:
    """Activates the ruleset for the live Firestore rules service."""
    return ResourceFragment(
        "resource",
        "google_firebaserules_release",
        "firestore",
        {
            "provider": GOOGLE_BETA_PROVIDER,
            "project": PROJECT_ID_REF,
            "name": FIRESTORE_RULES_SERVICE,
            "ruleset_name": (
                "projects/${google_project.default.project_id}"
                "/rulesets/${google_firebaserules_ruleset.firestore.name}"
            ),
        },
    )


def identity_platform_config_resource() -> ResourceFragment:
    return ResourceFragment(
        "resource",
        "google_identity_platform_config",
        "default",
        {
            "provider": GOOGLE_BETA_PROVIDER,
            "project": PROJECT_ID_REF,
        },
    )


def static_fragments(parent: str = PARENT_FOLDER) -> List[ResourceFragment]:
    """
    Every static block of the document, in output order.

    Args:
        parent: PARENT_FOLDER or PARENT_ORGANIZATION, selecting which local the
            project resource is parented under

    Returns:
        Fragments for the terraform, provider and resource categories
    """
    return [
        terraform_block(),
        *provider_blocks(),
        project_resource(parent),
        project_services_resource(),
        app_engine_application_resource(),
        firestore_ruleset_resource(),
        firestore_release_resource(),
        firebase_project_resource(),
        identity_platform_config_resource(),
    ]
