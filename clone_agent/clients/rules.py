"""Firebase Rules API client"""

from dataclasses import dataclass
from typing import List, Optional

from .base import GoogleApiClient


@dataclass
class RulesetFile:
    """One source file of a ruleset."""
    name: str
    content: str


class RulesClient(GoogleApiClient):
    """Reads releases and ruleset sources."""

    base_url = "https://firebaserules.googleapis.com/v1"

    async def list_releases(self, project_id: str) -> List[dict]:
        """List every release of a project."""
        return await self.list_all("GET", f"projects/{project_id}/releases", "releases")

    async def get_latest_ruleset_name(self, project_id: str, service: str) -> Optional[str]:
        """
        Get the ruleset currently released for a service.

        Args:
            project_id: Project to inspect
            service: Release name, e.g. "cloud.firestore"

        Returns:
            Full ruleset resource name, or None when the service has no release
        """
        prefix = f"projects/{project_id}/releases/{service}"
        for release in await self.list_releases(project_id):
            if release.get("name", "").startswith(prefix):
                return release.get("rulesetName") or None
        return None

    async def get_ruleset_content(self, ruleset_name: str) -> List[RulesetFile]:
        """Get the source files of a ruleset."""
        ruleset = await self.get(ruleset_name)
        files = ruleset.get("source", {}).get("files", [])
        return [RulesetFile(name=f.get("name", ""), content=f.get("content", "")) for f in files]
