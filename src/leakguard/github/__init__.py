# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GitHub REST, event payload and runner-file helpers."""

from .actions import append_step_summary, set_output
from .client import GitHubClient
from .event import build_run_context, load_event_payload, load_run_context

__all__ = [
    "GitHubClient",
    "append_step_summary",
    "build_run_context",
    "load_event_payload",
    "load_run_context",
    "set_output",
]
