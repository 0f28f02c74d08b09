# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Reporting: job summary, findings artifact and pull request comments."""

from .artifacts import ArtifactStager
from .comments import PullRequestCommenter
from .reporter import Reporter
from .sarif import Finding, load_findings

__all__ = ["ArtifactStager", "Finding", "PullRequestCommenter", "Reporter", "load_findings"]
