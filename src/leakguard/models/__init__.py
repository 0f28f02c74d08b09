# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for LeakGuard."""

from ..http.models import Headers, HttpRequest, HttpResponse, RetryConfig
from .context import EventKind, RunContext
from .gate import ActorClassification, GateDecision, GateReason
from .outcome import Interpretation, OutcomeKind, ScanOutcome

__all__ = [
    "ActorClassification",
    "EventKind",
    "GateDecision",
    "GateReason",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "Interpretation",
    "OutcomeKind",
    "RetryConfig",
    "RunContext",
    "ScanOutcome",
]
