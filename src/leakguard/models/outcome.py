# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan outcome models."""

from dataclasses import dataclass
from enum import Enum

from ..constants import LEAKS_EXIT_CODE


class OutcomeKind(str, Enum):
    CLEAN = "CLEAN"
    LEAKS_DETECTED = "LEAKS_DETECTED"
    EXECUTION_ERROR = "EXECUTION_ERROR"


@dataclass(frozen=True)
class ScanOutcome:
    """Raw gitleaks exit status."""

    raw_code: int

    @property
    def kind(self) -> OutcomeKind:
        if self.raw_code == 0:
            return OutcomeKind.CLEAN
        if self.raw_code == LEAKS_EXIT_CODE:
            return OutcomeKind.LEAKS_DETECTED
        return OutcomeKind.EXECUTION_ERROR


@dataclass(frozen=True)
class Interpretation:
    """Process-level meaning of a ScanOutcome."""

    outcome: ScanOutcome
    exit_code: int
    message: str

    @property
    def kind(self) -> OutcomeKind:
        return self.outcome.kind
