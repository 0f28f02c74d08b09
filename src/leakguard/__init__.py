# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
LeakGuard package entrypoint.

This package runs a license-gated gitleaks secret scan for a GitHub Actions event:
the repository owner is classified, the license gate is enforced, a scan strategy
is picked from the event type, and the gitleaks exit status is mapped to the
process exit code and a job summary. HTTP behavior is abstracted behind an
injectable client interface, and domain objects are modeled with typed dataclasses.
"""

from .config import ActionSettings, HttpSettings, ManualScanMode, load_action_settings, load_http_settings
from .errors import (
    ConfigurationError,
    EngineResolutionFailure,
    GateFailure,
    LeakGuardError,
    ReportingFailure,
    ScanExecutionError,
    UnsupportedEvent,
)
from .gate import ActorClassifier, KeygenLicenseValidator, LicenseGate
from .github import GitHubClient, load_run_context
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, StubHttpClient, create_default_http_client
from .log import setup_logging
from .models import ActorClassification, EventKind, GateDecision, Interpretation, OutcomeKind, RunContext, ScanOutcome
from .runtime import LeakGuard
from .scan import ScanExecutor, Strategy, interpret, select_strategy
from .version import __version__

__all__ = [
    "ActionSettings",
    "ActorClassification",
    "ActorClassifier",
    "ConfigurationError",
    "EngineResolutionFailure",
    "EventKind",
    "GateDecision",
    "GateFailure",
    "GitHubClient",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "Interpretation",
    "KeygenLicenseValidator",
    "LeakGuard",
    "LeakGuardError",
    "LicenseGate",
    "ManualScanMode",
    "OutcomeKind",
    "ReportingFailure",
    "RunContext",
    "ScanExecutionError",
    "ScanExecutor",
    "ScanOutcome",
    "Strategy",
    "StubHttpClient",
    "UnsupportedEvent",
    "create_default_http_client",
    "interpret",
    "load_action_settings",
    "load_http_settings",
    "load_run_context",
    "select_strategy",
    "setup_logging",
    "__version__",
]
