# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Execute a scan strategy end to end and return gitleaks' exit status."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ..github.actions import set_output
from ..models.context import RunContext
from ..report.artifacts import ArtifactStager
from ..report.comments import PullRequestCommenter
from ..report.sarif import load_findings
from .runner import GitleaksRunner
from .strategy import PullRequestCommits, ScanPlan, Strategy, plan_scan

logger = logging.getLogger(__name__)


class ScanGitHub(PullRequestCommits, Protocol):
    def list_review_comments(self, repository: str, pull_number: int) -> list[dict[str, Any]]: ...

    def create_review_comment(self, repository: str, pull_number: int, **kwargs: Any) -> dict[str, Any]: ...


class ScanExecutor:
    """
    Plans the scan, runs gitleaks and handles its side outputs.

    Artifact staging and PR comments are best effort: their failures are logged and
    never change the returned exit code. Planning and process failures propagate;
    the controller folds them into an execution-error outcome.
    """

    def __init__(
        self,
        runner: GitleaksRunner,
        github: ScanGitHub,
        *,
        stager: ArtifactStager | None = None,
        commenter: PullRequestCommenter | None = None,
    ):
        self.runner = runner
        self.github = github
        self.stager = stager or ArtifactStager(runner.settings)
        self.commenter = commenter or PullRequestCommenter(github)

    def execute(self, strategy: Strategy, ctx: RunContext, *, upload_artifact: bool) -> int:
        logger.info("event type: %s", ctx.event_name)
        plan = plan_scan(strategy, ctx, self.github)
        exit_code = self.runner.run(plan)
        try:
            set_output(ctx.settings.output_path, "exit-code", exit_code)
        except OSError as exc:
            logger.warning("Could not write the exit-code step output: %s", exc)

        if exit_code != self.runner.leaks_exit_code:
            return exit_code

        if upload_artifact:
            self._stage_artifact()
        if plan.strategy == Strategy.PULL_REQUEST and ctx.settings.enable_comments:
            self._comment(plan, ctx)
        return exit_code

    def _stage_artifact(self) -> None:
        try:
            self.stager.upload()
        except OSError as exc:
            logger.warning("Could not stage the gitleaks report artifact: %s", exc)

    def _comment(self, plan: ScanPlan, ctx: RunContext) -> None:
        try:
            findings = load_findings(ctx.settings.resolved_report_path())
            posted = self.commenter.comment(findings, ctx)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not comment on pull request #%s: %s", ctx.pull_number, exc)
            return
        logger.info("Posted %d review comment(s) for commits %s..%s", posted, plan.base_ref, plan.head_ref)


__all__ = ["ScanExecutor"]
