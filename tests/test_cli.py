"""Tests for the command line entry point"""

import pytest
from unittest.mock import AsyncMock, patch

from clone_agent.__main__ import main, parse_args
from clone_agent.commands import CloneResult
from clone_agent.errors import ConfigurationError

from conftest import http_status_error


@pytest.fixture(autouse=True)
def quiet_environment(monkeypatch):
    for name in ("GOOGLE_OAUTH_ACCESS_TOKEN", "FIREBASE_PROJECT", "GOOGLE_CLOUD_PROJECT", "JSON_LOGS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    with patch("clone_agent.config.load_dotenv"), patch("clone_agent.__main__.setup_logging"):
        yield


class TestParseArgs:
    """Test argument parsing"""

    def test_projects_clone(self):
        args = parse_args(["projects:clone", "target", "-n", "Name", "-f", "12", "-P", "origin"])
        assert args.command == "projects:clone"
        assert args.project_id == "target"
        assert args.display_name == "Name"
        assert args.folder == "12"
        assert args.project == "origin"

    def test_organization_and_folder_are_exclusive(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["projects:clone", "target", "-o", "1", "-f", "2"])
        assert exc_info.value.code != 0

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """Test exit codes"""

    def test_success(self, tmp_path):
        result = CloneResult(output_path=tmp_path / "project_clone.tf.json", document_count=2)
        with patch("clone_agent.__main__.run_projects_clone", new=AsyncMock(return_value=result)) as run:
            code = main(["projects:clone", "target", "--token", "ya29.x", "-P", "origin", "--out", str(tmp_path)])

        assert code == 0
        config = run.await_args.args[0]
        assert config.origin_project_id == "origin"
        assert config.output_dir == str(tmp_path)
        assert run.await_args.args[1] == "target"

    def test_configuration_error_exits_nonzero(self):
        with patch(
            "clone_agent.__main__.run_projects_clone",
            new=AsyncMock(side_effect=ConfigurationError("Project ID cannot be empty")),
        ):
            assert main(["projects:clone"]) == 1

    def test_api_error_exits_nonzero(self):
        with patch(
            "clone_agent.__main__.run_projects_clone",
            new=AsyncMock(side_effect=http_status_error(403)),
        ):
            assert main(["projects:clone", "target", "--token", "t", "-P", "o"]) == 1

    def test_invalid_config_value(self):
        assert main(["projects:clone", "target", "--timeout", "0"]) == 1

    def test_keyboard_interrupt(self):
        with patch(
            "clone_agent.__main__.run_projects_clone",
            new=AsyncMock(side_effect=KeyboardInterrupt()),
        ):
            assert main(["projects:clone", "target", "--token", "t", "-P", "o"]) == 130


class TestFailureMessages:
    """Every failure is reported with its cause and exit code 1"""

    def run_failing(self, error):
        with patch("clone_agent.__main__.run_projects_clone", new=AsyncMock(side_effect=error)), \
                patch("clone_agent.__main__.setup_logging") as setup:
            code = main(["projects:clone", "target", "--token", "t", "-P", "o"])
        messages = [c.args[0] for c in setup.return_value.error.call_args_list]
        return code, messages

    def test_bad_request_names_status_and_url(self):
        code, messages = self.run_failing(
            http_status_error(400, url="https://firestore.googleapis.com/v1/projects/o")
        )
        assert code == 1
        assert "HTTP 400" in messages[0]
        assert "https://firestore.googleapis.com/v1/projects/o" in messages[0]

    def test_write_failure_names_cause(self):
        code, messages = self.run_failing(
            PermissionError(13, "Permission denied", "terraform/project_clone.tf.json")
        )
        assert code == 1
        assert "PermissionError" in messages[0]
        assert "Permission denied" in messages[0]

    def test_rate_limit_with_http_date(self):
        code, messages = self.run_failing(
            http_status_error(429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"})
        )
        assert code == 1
        assert "quota" in messages[0]

    def test_invalid_log_level_in_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        assert main(["projects:clone", "target", "--token", "t", "-P", "o"]) == 1
