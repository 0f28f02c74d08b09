# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Findings parsed from the SARIF report gitleaks writes."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Finding:
    rule_id: str
    description: str
    file: str
    start_line: int
    commit: str
    author: str = ""
    email: str = ""
    date: str = ""

    @property
    def fingerprint(self) -> str:
        """The ``.gitleaksignore`` entry that silences this finding."""
        return f"{self.commit}:{self.file}:{self.rule_id}:{self.start_line}"

    @classmethod
    def from_sarif_result(cls, result: Mapping[str, Any]) -> Finding:
        location: Mapping[str, Any] = {}
        locations = result.get("locations") or []
        if isinstance(locations, list) and locations and isinstance(locations[0], Mapping):
            location = locations[0].get("physicalLocation") or {}
        artifact = location.get("artifactLocation") or {}
        region = location.get("region") or {}
        fingerprints = result.get("partialFingerprints") or {}
        message = result.get("message") or {}
        try:
            start_line = int(region.get("startLine") or 0)
        except (TypeError, ValueError):
            start_line = 0
        return cls(
            rule_id=str(result.get("ruleId") or ""),
            description=str(message.get("text") or "") if isinstance(message, Mapping) else str(message),
            file=str(artifact.get("uri") or ""),
            start_line=start_line,
            commit=str(fingerprints.get("commitSha") or ""),
            author=str(fingerprints.get("author") or ""),
            email=str(fingerprints.get("email") or ""),
            date=str(fingerprints.get("date") or ""),
        )


def parse_findings(document: Mapping[str, Any]) -> list[Finding]:
    findings: list[Finding] = []
    for run in document.get("runs") or []:
        if not isinstance(run, Mapping):
            continue
        for result in run.get("results") or []:
            if isinstance(result, Mapping):
                findings.append(Finding.from_sarif_result(result))
    return findings


def load_findings(path: str | Path) -> list[Finding]:
    """Read a SARIF file; raises OSError or ValueError when it is missing or malformed."""
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(document, Mapping):
        raise ValueError(f"SARIF report at {path} is not a JSON object")
    return parse_findings(document)


__all__ = ["Finding", "load_findings", "parse_findings"]
