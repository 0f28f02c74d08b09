# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Write the job summary for a finished scan."""

from __future__ import annotations

import logging

from ..errors import ReportingFailure
from ..github.actions import append_step_summary
from ..models.context import RunContext
from ..models.outcome import Interpretation, OutcomeKind
from .sarif import Finding, load_findings
from .summary import render_summary

logger = logging.getLogger(__name__)


class Reporter:
    def report(self, interpretation: Interpretation, ctx: RunContext) -> None:
        """
        Produce the durable summary for this run.

        `summary_enabled` only switches the document off; the exit code is decided
        elsewhere. Raises ReportingFailure when the summary cannot be written.
        """
        if not ctx.summary_enabled:
            logger.debug("Job summary disabled; skipping.")
            return

        findings: list[Finding] | None = None
        if interpretation.kind == OutcomeKind.LEAKS_DETECTED:
            findings = self._findings(ctx)

        markdown = render_summary(interpretation, ctx, findings)
        try:
            path = append_step_summary(ctx.settings.step_summary_path, markdown)
        except OSError as exc:
            raise ReportingFailure(f"could not write the job summary: {exc}") from exc
        logger.debug("Job summary written to %s", path)

    @staticmethod
    def _findings(ctx: RunContext) -> list[Finding] | None:
        report_path = ctx.settings.resolved_report_path()
        try:
            return load_findings(report_path)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read gitleaks report %s: %s", report_path, exc)
            return None


__all__ = ["Reporter"]
