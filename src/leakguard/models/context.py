# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run context built once from the triggering event."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from ..config import ActionSettings


class EventKind(str, Enum):
    PUSH = "push"
    PULL_REQUEST = "pull_request"
    WORKFLOW_DISPATCH = "workflow_dispatch"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, name: str | None) -> "EventKind":
        """Map a GitHub event name onto the closed set of kinds LeakGuard handles."""
        raw = (name or "").strip()
        for kind in cls:
            if kind is not cls.UNSUPPORTED and kind.value == raw:
                return kind
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class RunContext:
    """
    Immutable description of a single run.

    `head_ref`/`base_ref` are the push's ``after``/``before`` SHAs; for pull requests
    they are filled in later from the REST API, so here they may be None.
    """

    event_kind: EventKind
    event_name: str
    owner_login: str
    repository: str
    settings: ActionSettings = field(default_factory=ActionSettings)
    head_ref: str | None = None
    base_ref: str | None = None
    pull_number: int | None = None
    license_credential: str | None = None
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.payload, MappingProxyType):
            object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    @property
    def summary_enabled(self) -> bool:
        return self.settings.enable_summary

    @property
    def artifact_upload_enabled(self) -> bool:
        return self.settings.enable_upload_artifact
