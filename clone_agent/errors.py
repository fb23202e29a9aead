"""Error types and user-facing error reports for project cloning"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Dict, List, Mapping, Optional

import httpx


class CloneError(Exception):
    """Base error for failures that should surface as a command failure."""


class ConfigurationError(CloneError):
    """Raised for invalid arguments, detected before any network call."""


class RulesetShapeError(CloneError):
    """Raised when a ruleset does not contain exactly one source file."""

    def __init__(self, ruleset_name: str, file_count: int):
        super().__init__(
            f"Ruleset '{ruleset_name}' has {file_count} source files, expected exactly 1"
        )
        self.ruleset_name = ruleset_name
        self.file_count = file_count


class FragmentCollisionError(CloneError):
    """Raised when two fragments would occupy the same place in the document."""

    def __init__(self, key: tuple, existing: tuple):
        path = ".".join(key)
        if key == existing:
            message = f"Duplicate Terraform fragment '{path}'"
        else:
            message = f"Terraform fragment '{path}' overlaps '{'.'.join(existing)}'"
        super().__init__(message)
        self.key = key
        self.existing = existing


@dataclass
class ErrorReport:
    """
    Structured error with user-friendly messaging and recovery suggestions.

    Attributes:
        category: Error category (auth, permission, not_found, rate_limit, request, network, validation, unknown)
        code: Unique error code (e.g., "GOOGLE_AUTH_001")
        message: User-friendly error message
        technical: Technical details for debugging
        suggestion: What the user should do to fix it
        retry_after: Optional timestamp when the operation can be retried
        raw_error: Original exception for logging
    """
    category: str
    code: str
    message: str
    technical: str
    suggestion: str
    retry_after: Optional[datetime] = None
    raw_error: Optional[Exception] = None


RECOVERY_SUGGESTIONS: Dict[str, List[str]] = {
    "GOOGLE_AUTH_001": [
        "Refresh your access token (gcloud auth print-access-token)",
        "Set GOOGLE_OAUTH_ACCESS_TOKEN or pass --token",
    ],
    "GOOGLE_PERMISSION_001": [
        "Ask for the Firebase Admin or Editor role on the origin project",
        "Check that the required APIs are enabled on the origin project",
    ],
    "GOOGLE_RATE_LIMIT_001": [
        "Wait {wait_time} before retrying",
        "Raise --max-retries to let the client back off automatically",
    ],
    "CONFIG_001": [
        "Run with --help to see the accepted arguments",
    ],
}


def retry_after_seconds(headers: Mapping[str, str], default: int = 60) -> int:
    """
    Seconds to wait according to a Retry-After header.

    The header holds either delay-seconds or an HTTP-date; anything else
    falls back to ``default``.
    """
    value = headers.get("Retry-After")
    if value is None:
        return default
    try:
        return max(int(value), 0)
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return default
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(int((when - datetime.now(timezone.utc)).total_seconds()), 0)


def _format_wait(seconds: int) -> str:
    minutes, rest = divmod(seconds, 60)
    if minutes == 0:
        return f"{rest} seconds"
    wait = f"{minutes} minute{'s' if minutes > 1 else ''}"
    if rest:
        wait += f" {rest} seconds"
    return wait


def create_google_api_error(exception: Exception, resource: Optional[str] = None) -> ErrorReport:
    """
    Create an ErrorReport from an exception raised while cloning.

    Args:
        exception: The original exception
        resource: Optional resource description for context (e.g. a project id)

    Returns:
        ErrorReport with appropriate category and suggestions
    """
    resource_msg = f" '{resource}'" if resource else ""

    if isinstance(exception, ConfigurationError):
        return ErrorReport(
            category="validation",
            code="CONFIG_001",
            message=str(exception),
            technical=f"{type(exception).__name__}: {exception}",
            suggestion=RECOVERY_SUGGESTIONS["CONFIG_001"][0],
            raw_error=exception
        )

    if isinstance(exception, CloneError):
        return ErrorReport(
            category="validation",
            code="CLONE_001",
            message=str(exception),
            technical=f"{type(exception).__name__}: {exception}",
            suggestion="The origin project returned data this tool cannot export. "
                       "Inspect it in the Firebase console before retrying.",
            raw_error=exception
        )

    if isinstance(exception, httpx.HTTPStatusError):
        status_code = exception.response.status_code

        if status_code == 401:
            return ErrorReport(
                category="auth",
                code="GOOGLE_AUTH_001",
                message="Invalid or expired Google access token",
                technical=f"HTTP 401 Unauthorized: {exception}",
                suggestion=". ".join(RECOVERY_SUGGESTIONS["GOOGLE_AUTH_001"]),
                raw_error=exception
            )

        elif status_code == 403:
            return ErrorReport(
                category="permission",
                code="GOOGLE_PERMISSION_001",
                message=f"No access to Google Cloud resource{resource_msg}",
                technical=f"HTTP 403 Forbidden: {exception}",
                suggestion=". ".join(RECOVERY_SUGGESTIONS["GOOGLE_PERMISSION_001"]),
                raw_error=exception
            )

        elif status_code == 404:
            return ErrorReport(
                category="not_found",
                code="GOOGLE_NOT_FOUND_001",
                message=f"Google Cloud resource{resource_msg} not found",
                technical=f"HTTP 404 Not Found: {exception}",
                suggestion="Check the project id is correct and that Firebase is enabled on it.",
                raw_error=exception
            )

        elif status_code == 429:
            retry_after = retry_after_seconds(exception.response.headers)
            suggestions = [
                s.format(wait_time=_format_wait(retry_after))
                for s in RECOVERY_SUGGESTIONS["GOOGLE_RATE_LIMIT_001"]
            ]
            return ErrorReport(
                category="rate_limit",
                code="GOOGLE_RATE_LIMIT_001",
                message="Google API quota exceeded",
                technical=f"HTTP 429 Too Many Requests: {exception}",
                suggestion=f"{suggestions[0]}. {suggestions[1]}",
                retry_after=datetime.now(timezone.utc) + timedelta(seconds=retry_after),
                raw_error=exception
            )

        elif status_code >= 500:
            return ErrorReport(
                category="network",
                code="GOOGLE_SERVER_001",
                message="Google API server error",
                technical=f"HTTP {status_code} Server Error: {exception}",
                suggestion="The service is having issues. Try again in a few minutes.",
                raw_error=exception
            )

        elif status_code >= 400:
            return ErrorReport(
                category="request",
                code="GOOGLE_REQUEST_001",
                message=(
                    f"Google API rejected the request with HTTP {status_code}: "
                    f"{exception.request.method} {exception.request.url}"
                ),
                technical=f"HTTP {status_code}: {exception}",
                suggestion="Check the origin project id and the command arguments, then run again with -v for details.",
                raw_error=exception
            )

    elif isinstance(exception, (httpx.ConnectError, httpx.ConnectTimeout)):
        return ErrorReport(
            category="network",
            code="GOOGLE_NETWORK_001",
            message="Cannot connect to Google APIs",
            technical=f"Connection error: {exception}",
            suggestion="Verify your network connection and proxy settings.",
            raw_error=exception
        )

    elif isinstance(exception, httpx.TimeoutException):
        return ErrorReport(
            category="network",
            code="GOOGLE_TIMEOUT_001",
            message="Google API request timed out",
            technical=f"Timeout error: {exception}",
            suggestion="Try again, or raise --timeout.",
            raw_error=exception
        )

    return ErrorReport(
        category="unknown",
        code="CLONE_ERROR_999",
        message=f"Unexpected error: {type(exception).__name__}: {exception}",
        technical=f"{type(exception).__name__}: {exception}",
        suggestion="Run again with -v to see the full traceback.",
        raw_error=exception
    )
