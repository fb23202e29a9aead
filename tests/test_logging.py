"""Tests for logging setup and masking"""

import json
import logging

import pytest

from clone_agent.logging_config import MaskingFormatter, PlainMaskingFormatter, mask_sensitive_data


class TestMaskSensitiveData:
    """Test secret masking"""

    def test_access_token(self):
        assert mask_sensitive_data("token ya29.a0AfH6SMC-xyz") == "token ya29.****"

    def test_client_secret(self):
        assert "abc123" not in mask_sensitive_data("secret GOCSPX-abc123")

    def test_bearer(self):
        assert mask_sensitive_data("Authorization: Bearer abc.def") == "Authorization: Bearer ****"

    def test_plain_text_untouched(self):
        assert mask_sensitive_data("nothing to hide") == "nothing to hide"


class TestFormatters:
    """Test the formatters mask records"""

    def _record(self, msg, *args):
        return logging.LogRecord("clone_agent", logging.INFO, __file__, 1, msg, args, None)

    def test_json_formatter(self):
        formatter = MaskingFormatter("%(levelname)s %(name)s %(message)s")
        output = json.loads(formatter.format(self._record("using %s", "ya29.secret")))
        assert output["message"] == "using ya29.****"
        assert output["levelname"] == "INFO"

    def test_plain_formatter(self):
        formatter = PlainMaskingFormatter("%(message)s")
        assert formatter.format(self._record("secret GOCSPX-zzz")) == "secret GOCSPX-****"
