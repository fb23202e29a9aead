"""Identity Toolkit admin API client"""

from typing import Any, Dict

from .base import GoogleApiClient

GOOGLE_IDP_ID = "google.com"


class IdentityToolkitClient(GoogleApiClient):
    """Reads identity provider configuration."""

    base_url = "https://identitytoolkit.googleapis.com/admin/v2"

    async def get_default_supported_idp_config(
        self, project_id: str, idp_id: str = GOOGLE_IDP_ID
    ) -> Dict[str, Any]:
        """
        Get a default supported IdP config.

        Returns:
            Config with ``clientId``, ``clientSecret`` and ``enabled``
        """
        return await self.get(f"projects/{project_id}/defaultSupportedIdpConfigs/{idp_id}")
