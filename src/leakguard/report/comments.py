# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pull request review comments for each leak."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ..errors import LeakGuardError
from ..models.context import RunContext
from .sarif import Finding

logger = logging.getLogger(__name__)


class ReviewComments(Protocol):
    def list_review_comments(self, repository: str, pull_number: int) -> list[dict[str, Any]]: ...

    def create_review_comment(
        self,
        repository: str,
        pull_number: int,
        *,
        body: str,
        commit_id: str,
        path: str,
        line: int,
    ) -> dict[str, Any]: ...


def render_comment(finding: Finding, notify_users: tuple[str, ...] = ()) -> str:
    body = (
        f"🛑 **Gitleaks** has detected a secret with rule-id `{finding.rule_id}` in commit {finding.commit}.\n"
        "If this secret is a _true_ positive, please rotate the secret ASAP.\n\n"
        "If this secret is a _false_ positive, you can add the fingerprint below to your "
        "`.gitleaksignore` file and commit the change to this branch.\n\n"
        f"```\necho {finding.fingerprint} >> .gitleaksignore\n```\n"
    )
    if notify_users:
        body += f"\n\nCC: {', '.join(notify_users)}"
    return body


class PullRequestCommenter:
    def __init__(self, github: ReviewComments):
        self.github = github

    def comment(self, findings: list[Finding], ctx: RunContext) -> int:
        """Post one comment per finding, skipping ones already on the PR. Returns the number posted."""
        if ctx.pull_number is None:
            return 0
        existing = {
            (c.get("body"), c.get("path"), c.get("line") or c.get("original_line"))
            for c in self.github.list_review_comments(ctx.repository, ctx.pull_number)
        }
        posted = 0
        for finding in findings:
            if not finding.commit or not finding.file or finding.start_line <= 0:
                continue
            body = render_comment(finding, ctx.settings.notify_users)
            if (body, finding.file, finding.start_line) in existing:
                logger.debug("Skipping duplicate comment for %s", finding.fingerprint)
                continue
            try:
                self.github.create_review_comment(
                    ctx.repository,
                    ctx.pull_number,
                    body=body,
                    commit_id=finding.commit,
                    path=finding.file,
                    line=finding.start_line,
                )
            except LeakGuardError as exc:
                logger.warning(
                    "Error encountered when attempting to write a comment on PR #%s: %s. "
                    "Likely an issue with the commit or file diff.",
                    ctx.pull_number,
                    exc,
                )
                continue
            posted += 1
        return posted


__all__ = ["PullRequestCommenter", "render_comment"]
