# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan strategy selection and planning."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from ..config import ManualScanMode
from ..constants import ZERO_SHA
from ..errors import ScanExecutionError
from ..models.context import EventKind, RunContext

logger = logging.getLogger(__name__)

SINGLE_COMMIT_LOG_OPTS = "-1"


class Strategy(str, Enum):
    LINEAR_HISTORY = "LINEAR_HISTORY"
    MANUAL = "MANUAL"
    PULL_REQUEST = "PULL_REQUEST"
    UNSUPPORTED = "UNSUPPORTED"


_STRATEGIES: dict[EventKind, Strategy] = {
    EventKind.PUSH: Strategy.LINEAR_HISTORY,
    EventKind.WORKFLOW_DISPATCH: Strategy.MANUAL,
    EventKind.PULL_REQUEST: Strategy.PULL_REQUEST,
    EventKind.UNSUPPORTED: Strategy.UNSUPPORTED,
}

_missing = set(EventKind) - set(_STRATEGIES)
if _missing:  # pragma: no cover - guards future EventKind additions
    raise RuntimeError(f"No scan strategy mapped for event kinds: {sorted(k.value for k in _missing)}")


def select_strategy(event_kind: EventKind) -> Strategy:
    return _STRATEGIES[event_kind]


class PullRequestCommits(Protocol):
    def list_pull_request_commits(self, repository: str, pull_number: int) -> list[dict[str, Any]]: ...


@dataclass(frozen=True)
class ScanPlan:
    """What gitleaks should scan: ``log_opts`` is passed through as ``--log-opts``."""

    strategy: Strategy
    base_ref: str | None = None
    head_ref: str | None = None
    log_opts: str | None = None


def _range_log_opts(base_ref: str, head_ref: str) -> str:
    return f"--no-merges --first-parent {base_ref}^..{head_ref}"


def _plan_push(ctx: RunContext) -> ScanPlan:
    base, head = ctx.base_ref, ctx.head_ref
    if not base or not head or base == head or base == ZERO_SHA:
        # Same tip, or a freshly created branch with no previous tip: scan just the newest commit.
        return ScanPlan(Strategy.LINEAR_HISTORY, base, head, SINGLE_COMMIT_LOG_OPTS)
    return ScanPlan(Strategy.LINEAR_HISTORY, base, head, _range_log_opts(base, head))


def _plan_manual(ctx: RunContext) -> ScanPlan:
    if ctx.settings.manual_scan_mode == ManualScanMode.LATEST:
        return ScanPlan(Strategy.MANUAL, log_opts=SINGLE_COMMIT_LOG_OPTS)
    return ScanPlan(Strategy.MANUAL)


def _plan_pull_request(ctx: RunContext, github: PullRequestCommits) -> ScanPlan:
    if ctx.pull_number is None:
        raise ScanExecutionError("pull_request event payload has no pull request number")
    commits = github.list_pull_request_commits(ctx.repository, ctx.pull_number)
    shas = [str(commit.get("sha")) for commit in commits if commit.get("sha")]
    if not shas:
        raise ScanExecutionError(f"pull request #{ctx.pull_number} has no commits to scan")
    base, head = shas[0], shas[-1]
    return ScanPlan(Strategy.PULL_REQUEST, base, head, _range_log_opts(base, head))


def plan_scan(strategy: Strategy, ctx: RunContext, github: PullRequestCommits) -> ScanPlan:
    """Turn a strategy into concrete refs; pull requests query the REST API for their commits."""
    if strategy == Strategy.LINEAR_HISTORY:
        plan = _plan_push(ctx)
    elif strategy == Strategy.MANUAL:
        plan = _plan_manual(ctx)
    elif strategy == Strategy.PULL_REQUEST:
        plan = _plan_pull_request(ctx, github)
    else:
        raise ScanExecutionError(f"cannot plan a scan for strategy {strategy.value}")
    logger.debug("Scan plan: %s", plan)
    return plan


__all__ = ["ScanPlan", "Strategy", "plan_scan", "select_strategy"]
