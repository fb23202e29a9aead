"""Firebase Management API client (project metadata)"""

from typing import Any, Dict

from .base import GoogleApiClient


class FirebaseManagementClient(GoogleApiClient):
    """Reads Firebase project metadata."""

    base_url = "https://firebase.googleapis.com/v1beta1"

    async def get_project(self, project_id: str) -> Dict[str, Any]:
        """
        Get a Firebase project.

        Returns:
            Project resource, including ``displayName`` and ``resources.locationId``
        """
        self.logger.debug(f"Fetching Firebase project {project_id}")
        return await self.get(f"projects/{project_id}")
