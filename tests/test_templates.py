"""Tests for the static Terraform blocks and the locals block"""

import pytest

from clone_agent.terraform import FALLBACK_FOLDER_ID, build_locals, static_fragments
from clone_agent.terraform.templates import (
    PARENT_ORGANIZATION,
    firestore_release_resource,
    firestore_ruleset_resource,
    project_resource,
    provider_blocks,
)


class TestStaticFragments:
    """Test the static block library"""

    def test_keys_are_unique(self):
        """No two static fragments share a key"""
        keys = [f.key for f in static_fragments()]
        assert len(keys) == len(set(keys))

    def test_covers_expected_resources(self):
        """The library declares every block a clone needs"""
        keys = {f.key for f in static_fragments()}
        assert ("terraform",) in keys
        assert ("provider", "google") in keys
        assert ("provider", "google-beta") in keys
        assert ("resource", "google_project", "default") in keys
        assert ("resource", "google_project_service", "services") in keys
        assert ("resource", "google_app_engine_application", "appengine") in keys
        assert ("resource", "google_firebaserules_ruleset", "firestore") in keys
        assert ("resource", "google_firebaserules_release", "firestore") in keys
        assert ("resource", "google_firebase_project", "default") in keys
        assert ("resource", "google_identity_platform_config", "default") in keys

    def test_returns_fresh_data(self):
        """Mutating one result does not leak into the next"""
        first = static_fragments()
        first[0].attributes["required_version"] = "changed"
        assert static_fragments()[0].attributes["required_version"] == ">= 0.12.0"

    def test_beta_provider_overrides_user_project(self):
        """Only the elevated provider bills the user project"""
        google, beta = provider_blocks()
        assert "user_project_override" not in google.attributes
        assert beta.attributes["user_project_override"] is True

    def test_project_uses_folder_local_by_default(self):
        project = project_resource()
        assert project.attributes["folder_id"] == "${local.folder_id}"
        assert "org_id" not in project.attributes
        assert project.attributes["project_id"] == "${local.project}"

    def test_project_uses_org_local_for_organization_parent(self):
        project = project_resource(PARENT_ORGANIZATION)
        assert project.attributes["org_id"] == "${local.org_id}"
        assert "folder_id" not in project.attributes

    def test_unknown_parent_kind(self):
        with pytest.raises(ValueError):
            project_resource("billing-account")

    def test_ruleset_reads_rules_file(self):
        files = firestore_ruleset_resource().attributes["source"]["files"]
        assert files["name"] == "firestore.rules"
        assert files["content"] == '${file("firestore.rules")}'

    def test_release_activates_firestore_ruleset(self):
        release = firestore_release_resource().attributes
        assert release["name"] == "cloud.firestore"
        assert "${google_firebaserules_ruleset.firestore.name}" in release["ruleset_name"]


class TestBuildLocals:
    """Test the locals block"""

    def test_duplicate_apis_collapse(self, export_metadata):
        """Each API appears once, first occurrence order kept"""
        apis = build_locals(export_metadata).attributes["apis"]
        assert apis == ["firebase.googleapis.com", "firestore.googleapis.com"]

    def test_metadata_values(self, export_metadata):
        values = build_locals(export_metadata).attributes
        assert values["project"] == "clone-target"
        assert values["project_display_name"] == "Origin Project"
        assert values["location_id"] == "us-central"
        assert values["region"] == "nam5"
        assert values["zone"] == "us-central1-c"

    def test_fallback_folder(self, export_metadata):
        values = build_locals(export_metadata).attributes
        assert values["folder_id"] == FALLBACK_FOLDER_ID
        assert "org_id" not in values

    def test_explicit_folder(self, export_metadata):
        export_metadata.folder_id = "42"
        assert build_locals(export_metadata).attributes["folder_id"] == "42"

    def test_organization_parent(self, export_metadata):
        export_metadata.org_id = "777"
        values = build_locals(export_metadata).attributes
        assert values["org_id"] == "777"
        assert "folder_id" not in values

    def test_empty_api_list(self, export_metadata):
        export_metadata.apis = []
        assert build_locals(export_metadata).attributes["apis"] == []

    def test_locals_key(self, export_metadata):
        assert build_locals(export_metadata).key == ("locals",)
