"""Test configuration and fixtures"""

import pytest
from unittest.mock import AsyncMock

import httpx

from clone_agent.config import CloneConfig
from clone_agent.terraform import ExportMetadata


def http_status_error(status_code: int, url: str = "https://example.googleapis.com/x", headers=None):
    """Build a real httpx.HTTPStatusError for a given status"""
    request = httpx.Request("GET", url)
    response = httpx.Response(status_code, headers=headers or {}, request=request)
    return httpx.HTTPStatusError(f"{status_code}", request=request, response=response)


def firestore_document(project_id: str, collection_id: str, document_id: str, fields: dict):
    """Document resource as returned by the Firestore REST API"""
    return {
        "name": f"projects/{project_id}/databases/(default)/documents/{collection_id}/{document_id}",
        "fields": fields,
        "createTime": "2024-01-01T00:00:00Z",
        "updateTime": "2024-01-01T00:00:00Z",
    }


@pytest.fixture
def export_metadata():
    """Sample export metadata"""
    return ExportMetadata(
        project_id="clone-target",
        origin_project_id="origin-project",
        project_display_name="Origin Project",
        region="nam5",
        location_id="us-central",
        zone="us-central1-c",
        apis=[
            "firebase.googleapis.com",
            "firestore.googleapis.com",
            "firebase.googleapis.com",
        ],
    )


@pytest.fixture
def config_fixture(tmp_path):
    """Clone configuration writing into a temporary directory"""
    return CloneConfig(
        access_token="ya29.test-token",
        origin_project_id="origin-project",
        output_dir=str(tmp_path / "terraform"),
    )


@pytest.fixture
def config_doc_fields():
    return {
        "theme": {"stringValue": "dark"},
        "limits": {"mapValue": {"fields": {"max": {"integerValue": "5"}}}},
    }


@pytest.fixture
def mock_firestore_client(config_doc_fields):
    """Firestore client with one 'config' collection holding two documents"""
    client = AsyncMock()
    client.list_collection_ids.return_value = ["config"]
    client.list_documents.return_value = [
        firestore_document("origin-project", "config", "doc-1", config_doc_fields),
        firestore_document("origin-project", "config", "doc-2", {"enabled": {"booleanValue": True}}),
    ]
    return client


@pytest.fixture
def mock_identity_client():
    """Identity Toolkit client returning live credentials"""
    client = AsyncMock()
    client.get_default_supported_idp_config.return_value = {
        "name": "projects/origin-project/defaultSupportedIdpConfigs/google.com",
        "enabled": True,
        "clientId": "A",
        "clientSecret": "B",
    }
    return client


@pytest.fixture
def mock_rules_client():
    """Rules client with one released Firestore ruleset"""
    from clone_agent.clients import RulesetFile

    client = AsyncMock()
    client.get_latest_ruleset_name.return_value = "projects/origin-project/rulesets/abc-123"
    client.get_ruleset_content.return_value = [
        RulesetFile(name="firestore.rules", content="rules_version = '2';\n")
    ]
    return client


@pytest.fixture
def mock_firebase_client():
    client = AsyncMock()
    client.get_project.return_value = {
        "projectId": "origin-project",
        "displayName": "Origin Project",
        "resources": {"locationId": "europe-west"},
    }
    return client


@pytest.fixture
def clone_clients(mock_firebase_client, mock_rules_client, mock_firestore_client, mock_identity_client):
    from clone_agent.commands.projects_clone import CloneClients

    return CloneClients(
        firebase=mock_firebase_client,
        rules=mock_rules_client,
        firestore=mock_firestore_client,
        identity=mock_identity_client,
    )
