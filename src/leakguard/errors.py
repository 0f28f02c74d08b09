# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from .constants import (
    EXIT_CONFIGURATION_ERROR,
    EXIT_ENGINE_UNAVAILABLE,
    EXIT_GATE_FAILURE,
    EXIT_UNSUPPORTED_EVENT,
    SCAN_CRASH_EXIT_CODE,
)

if TYPE_CHECKING:
    from .http.models import HttpResponse
    from .models.gate import GateDecision


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    AUTH_ERROR = "AUTH_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class LeakGuardError(Exception):
    """Base class for errors that end a run with a specific exit code."""

    exit_code: int = 1


class ConfigurationError(LeakGuardError):
    """The run cannot start: missing or unreadable event payload, bad settings."""

    exit_code = EXIT_CONFIGURATION_ERROR


class GateFailure(LeakGuardError):
    """The license gate refused the run."""

    exit_code = EXIT_GATE_FAILURE

    def __init__(self, message: str, decision: "GateDecision"):
        super().__init__(message)
        self.decision = decision


class UnsupportedEvent(LeakGuardError):
    """The triggering event has no scan strategy."""

    exit_code = EXIT_UNSUPPORTED_EVENT

    def __init__(self, event_name: str):
        super().__init__(f"ERROR: The [{event_name}] event is not yet supported")
        self.event_name = event_name


class EngineResolutionFailure(LeakGuardError):
    """The gitleaks version or binary could not be resolved."""

    exit_code = EXIT_ENGINE_UNAVAILABLE


class ScanExecutionError(LeakGuardError):
    """The scan stage failed before gitleaks produced an exit code."""

    exit_code = SCAN_CRASH_EXIT_CODE


class ReportingFailure(LeakGuardError):
    """The summary or other report output could not be written."""


class LicenseValidationError(LeakGuardError):
    """The licensing service rejected the key or could not be reached."""

    exit_code = EXIT_GATE_FAILURE

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.code = code


class GitHubApiError(LeakGuardError):
    """A GitHub REST call failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.category = category


def categorize_status(status_code: int | None) -> ErrorCategory:
    """Map an HTTP status code to an ErrorCategory."""
    if status_code is None:
        return ErrorCategory.UNKNOWN_ERROR
    if status_code == 404:
        return ErrorCategory.NOT_FOUND
    if status_code == 429:
        return ErrorCategory.RATE_LIMITED
    if status_code in (401, 403):
        return ErrorCategory.AUTH_ERROR
    if status_code >= 500:
        return ErrorCategory.SERVER_ERROR
    if status_code < 400:
        return ErrorCategory.NONE
    return ErrorCategory.UNKNOWN_ERROR


def categorize_response(response: "HttpResponse") -> ErrorCategory:
    """
    Map a failed HttpResponse to ErrorCategory.

    Transport failures carry no status code, only the exception type name recorded
    by the client.
    """
    if response.status_code is not None:
        return categorize_status(response.status_code)
    error_type = (response.error_type or "").lower()
    if "timeout" in error_type:
        return ErrorCategory.TIMEOUT
    if any(marker in error_type for marker in ("connect", "network", "protocol", "proxy")):
        return ErrorCategory.CONNECTION_ERROR
    if response.ok:
        return ErrorCategory.NONE
    return ErrorCategory.UNKNOWN_ERROR


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import httpx

    if isinstance(exc, GitHubApiError):
        return exc.category

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: Optional[ErrorCategory]) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "request timed out",
        ErrorCategory.NOT_FOUND: "not found",
        ErrorCategory.RATE_LIMITED: "rate limited",
        ErrorCategory.AUTH_ERROR: "authentication or permission failure",
        ErrorCategory.CONNECTION_ERROR: "network connectivity issue",
        ErrorCategory.SERVER_ERROR: "server error",
        ErrorCategory.UNKNOWN_ERROR: "unexpected error",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "unexpected error")


__all__ = [
    "ConfigurationError",
    "EngineResolutionFailure",
    "ErrorCategory",
    "GateFailure",
    "GitHubApiError",
    "LeakGuardError",
    "LicenseValidationError",
    "ReportingFailure",
    "ScanExecutionError",
    "UnsupportedEvent",
    "categorize_exception",
    "categorize_response",
    "categorize_status",
    "error_category_to_reason",
]
