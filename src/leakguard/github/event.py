# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Load the triggering event payload and build the RunContext."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..config import ActionSettings
from ..errors import ConfigurationError
from ..models.context import EventKind, RunContext


def load_event_payload(event_path: str | None) -> dict[str, Any]:
    """Read the webhook payload GitHub writes to $GITHUB_EVENT_PATH."""
    if not event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set; is this running inside GitHub Actions?")
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Event payload not found at {event_path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not read event payload at {event_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Event payload at {event_path} is not a JSON object")
    return payload


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_run_context(
    settings: ActionSettings,
    payload: Mapping[str, Any],
    event_name: str | None,
) -> RunContext:
    """Build the immutable RunContext from a decoded payload."""
    repository = payload.get("repository") or {}
    if not isinstance(repository, Mapping):
        repository = {}
    owner = repository.get("owner") or {}
    owner_login = _str_or_none(owner.get("login") if isinstance(owner, Mapping) else None)
    if owner_login is None:
        raise ConfigurationError("Event payload has no repository.owner.login")

    full_name = _str_or_none(repository.get("full_name")) or settings.github_repository or ""

    pull_number: int | None = None
    pull_request = payload.get("pull_request")
    if isinstance(pull_request, Mapping) and pull_request.get("number") is not None:
        pull_number = int(pull_request["number"])
    elif payload.get("number") is not None:
        pull_number = int(payload["number"])

    name = (event_name or "").strip()
    return RunContext(
        event_kind=EventKind.parse(name),
        event_name=name or "unknown",
        owner_login=owner_login,
        repository=full_name,
        settings=settings,
        head_ref=_str_or_none(payload.get("after")),
        base_ref=_str_or_none(payload.get("before")),
        pull_number=pull_number,
        license_credential=settings.license_key,
        payload=payload,
    )


def load_run_context(
    settings: ActionSettings,
    *,
    event_path: str | None = None,
    event_name: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunContext:
    """Read $GITHUB_EVENT_PATH / $GITHUB_EVENT_NAME (or explicit overrides) into a RunContext."""
    env = os.environ if environ is None else environ
    payload = load_event_payload(event_path or env.get("GITHUB_EVENT_PATH"))
    return build_run_context(settings, payload, event_name or env.get("GITHUB_EVENT_NAME"))


__all__ = ["build_run_context", "load_event_payload", "load_run_context"]
