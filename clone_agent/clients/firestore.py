"""Cloud Firestore REST client"""

from typing import Any, Dict, List

from .base import GoogleApiClient

DEFAULT_DATABASE = "(default)"


def database_path(project_id: str, database: str = DEFAULT_DATABASE) -> str:
    """Root document path of a Firestore database."""
    return f"projects/{project_id}/databases/{database}/documents"


class FirestoreClient(GoogleApiClient):
    """Lists collections and documents of a Firestore database."""

    base_url = "https://firestore.googleapis.com/v1"

    async def list_collection_ids(self, db_path: str, max_pages: int = 1) -> List[str]:
        """
        List the top-level collection ids under a database path.

        Args:
            db_path: Output of database_path()
            max_pages: Pages to fetch (0 = all)
        """
        return await self.list_all(
            "POST", f"{db_path}:listCollectionIds", "collectionIds", max_pages=max_pages
        )

    async def list_documents(
        self, db_path: str, collection_id: str, max_pages: int = 1
    ) -> List[Dict[str, Any]]:
        """
        List the documents of one collection.

        Returns:
            Document resources as returned by the API (``name``, ``fields``, ...)
        """
        return await self.list_all(
            "GET", f"{db_path}/{collection_id}", "documents", max_pages=max_pages
        )
