# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Markdown job summary for a scan run."""

from __future__ import annotations

from ..models.context import RunContext
from ..models.outcome import Interpretation, OutcomeKind
from .sarif import Finding

TABLE_HEADERS = ("Rule ID", "Commit", "Secret URL", "Start Line", "Author", "Date", "Email", "File")


def _cell(value: object) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def _finding_row(finding: Finding, ctx: RunContext) -> list[str]:
    repo_url = f"{ctx.settings.server_url}/{ctx.repository}"
    commit_url = f"{repo_url}/commit/{finding.commit}"
    secret_url = f"{repo_url}/blob/{finding.commit}/{finding.file}#L{finding.start_line}"
    file_url = f"{repo_url}/blob/{finding.commit}/{finding.file}"
    return [
        _cell(finding.rule_id),
        f"[{finding.commit[:7]}]({commit_url})",
        f"[View Secret]({secret_url})",
        str(finding.start_line),
        _cell(finding.author),
        _cell(finding.date),
        _cell(finding.email),
        f"[{_cell(finding.file)}]({file_url})",
    ]


def render_summary(interpretation: Interpretation, ctx: RunContext, findings: list[Finding] | None = None) -> str:
    kind = interpretation.kind
    if kind == OutcomeKind.CLEAN:
        return "## No leaks detected ✅\n"
    if kind == OutcomeKind.EXECUTION_ERROR:
        return f"## ❌ Gitleaks exited with error. Exit code [{interpretation.outcome.raw_code}]\n"

    lines = ["## 🛑 Gitleaks detected secrets 🛑", ""]
    if not findings:
        lines.append("Leaks were reported but the findings could not be listed; see the gitleaks log output.")
        return "\n".join(lines) + "\n"
    lines.append("| " + " | ".join(TABLE_HEADERS) + " |")
    lines.append("|" + "---|" * len(TABLE_HEADERS))
    for finding in findings:
        lines.append("| " + " | ".join(_finding_row(finding, ctx)) + " |")
    return "\n".join(lines) + "\n"


__all__ = ["render_summary"]
