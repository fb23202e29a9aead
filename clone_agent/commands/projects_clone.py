"""
projects:clone - export a Terraform config that clones a Firebase project.

Every fetch happens before anything is written, so a failed mandatory fetch
leaves no artifact behind.
"""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from clone_agent.clients import (
    FirebaseManagementClient,
    FirestoreClient,
    IdentityToolkitClient,
    RulesClient,
    RulesetFile,
)
from clone_agent.config import CloneConfig
from clone_agent.errors import ConfigurationError, RulesetShapeError
from clone_agent.terraform import ExportMetadata, TerraformExportGenerator, serialize, write_text_atomic
from clone_agent.terraform.templates import FIRESTORE_RULES_SERVICE

logger = logging.getLogger(__name__)

DEFAULT_APIS: List[str] = [
    "serviceusage.googleapis.com",
    "cloudresourcemanager.googleapis.com",
    "firebase.googleapis.com",
    "identitytoolkit.googleapis.com",
    "firestore.googleapis.com",
    "firebaserules.googleapis.com",
    "firebasehosting.googleapis.com",
    "securetoken.googleapis.com",
]


@dataclass
class CloneClients:
    """The API clients one clone run talks to."""
    firebase: FirebaseManagementClient
    rules: RulesClient
    firestore: FirestoreClient
    identity: IdentityToolkitClient

    @classmethod
    def from_config(cls, config: CloneConfig) -> "CloneClients":
        kwargs = {
            "token": config.access_token,
            "timeout": config.timeout,
            "max_retries": config.max_retries,
            "max_requests_per_minute": config.max_requests_per_minute,
        }
        return cls(
            firebase=FirebaseManagementClient(**kwargs),
            rules=RulesClient(**kwargs),
            firestore=FirestoreClient(**kwargs),
            identity=IdentityToolkitClient(**kwargs),
        )

    def members(self) -> tuple:
        return (self.firebase, self.rules, self.firestore, self.identity)


@dataclass
class CloneResult:
    """What a clone run wrote."""
    output_path: Path
    rules_path: Optional[Path] = None
    document_count: int = 0
    written: List[Path] = field(default_factory=list)


def validate_clone_arguments(
    config: CloneConfig,
    target_project_id: Optional[str],
    organization: Optional[str] = None,
    folder: Optional[str] = None,
) -> None:
    """
    Fail fast on arguments that make the export impossible.

    Raises:
        ConfigurationError: On the first problem found
    """
    if organization and folder:
        raise ConfigurationError(
            "Invalid argument, please provide only one type of project parent (organization or folder)"
        )
    if not target_project_id:
        raise ConfigurationError("Project ID cannot be empty")
    if not config.origin_project_id:
        raise ConfigurationError(
            "No origin project: pass --project or set FIREBASE_PROJECT / GOOGLE_CLOUD_PROJECT"
        )
    if not config.access_token:
        raise ConfigurationError(
            "Not authenticated: pass --token or set GOOGLE_OAUTH_ACCESS_TOKEN"
        )


async def fetch_firestore_rules(rules: RulesClient, project_id: str) -> Optional[RulesetFile]:
    """
    Fetch the released Firestore rules source of a project.

    Returns:
        The single rules file, or None when Firestore has no release

    Raises:
        RulesetShapeError: The ruleset does not hold exactly one file
    """
    ruleset_name = await rules.get_latest_ruleset_name(project_id, FIRESTORE_RULES_SERVICE)
    logger.info(f"- {ruleset_name or 'No ruleset found'}")
    if not ruleset_name:
        return None

    files = await rules.get_ruleset_content(ruleset_name)
    if len(files) != 1:
        raise RulesetShapeError(ruleset_name, len(files))
    return files[0]


def build_export_metadata(
    config: CloneConfig,
    target_project_id: str,
    origin_project: dict,
    display_name: Optional[str] = None,
    organization: Optional[str] = None,
    folder: Optional[str] = None,
) -> ExportMetadata:
    """Combine CLI arguments, config defaults and origin metadata."""
    location_id = (origin_project.get("resources") or {}).get("locationId")
    return ExportMetadata(
        project_id=target_project_id,
        origin_project_id=config.origin_project_id,
        project_display_name=display_name or f"{origin_project.get('displayName')}",
        region=config.region,
        location_id=location_id or config.default_location_id,
        zone=config.zone,
        apis=list(DEFAULT_APIS),
        folder_id=folder,
        org_id=organization,
    )


async def run_projects_clone(
    config: CloneConfig,
    target_project_id: Optional[str],
    display_name: Optional[str] = None,
    organization: Optional[str] = None,
    folder: Optional[str] = None,
    clients: Optional[CloneClients] = None,
) -> CloneResult:
    """
    Export a Terraform config that can be used to clone the origin project.

    Args:
        config: Clone configuration (origin project, token, output location)
        target_project_id: Project id the generated config will create
        display_name: Display name for the new project (defaults to the origin's)
        organization: Parent organization id for the new project
        folder: Parent folder id for the new project
        clients: Pre-built API clients; built from config and closed here when omitted

    Returns:
        CloneResult describing the files written

    Raises:
        ConfigurationError: Invalid arguments, before any network call
        RulesetShapeError: The Firestore ruleset does not hold exactly one file
        httpx.HTTPError: A mandatory fetch failed
    """
    validate_clone_arguments(config, target_project_id, organization, folder)

    origin_project_id = config.origin_project_id
    async with AsyncExitStack() as stack:
        if clients is None:
            clients = CloneClients.from_config(config)
            for client in clients.members():
                await stack.enter_async_context(client)

        origin_project = await clients.firebase.get_project(origin_project_id)
        rules_file = await fetch_firestore_rules(clients.rules, origin_project_id)

        metadata = build_export_metadata(
            config, target_project_id, origin_project, display_name, organization, folder
        )
        generator = TerraformExportGenerator(
            clients.firestore, clients.identity, max_list_pages=config.max_list_pages
        )
        document = await generator.build_document(metadata)

    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    result = CloneResult(
        output_path=config.output_path,
        document_count=len(document["resource"].get("google_firestore_document", {})),
    )

    if rules_file is not None:
        result.rules_path = write_text_atomic(config.rules_path, rules_file.content)
        result.written.append(result.rules_path)
        logger.info(f"- {config.rules_path} generated/updated using the cloning project.")
    else:
        logger.warning(
            f"- No Firestore rules released in {origin_project_id}; "
            f"create {config.rules_path} before applying the config."
        )

    write_text_atomic(config.output_path, serialize(document))
    result.written.append(config.output_path)
    logger.info(f"- {config.output_path} generated.")
    return result
