# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Map a raw gitleaks exit status to the process exit code and user message."""

from ..constants import EXIT_LEAKS_DETECTED, EXIT_OK
from ..models.outcome import Interpretation, OutcomeKind, ScanOutcome

CLEAN_MESSAGE = "✅ No leaks detected"
LEAKS_MESSAGE = "🛑 Leaks detected, see job summary for details"


def interpret(raw_code: int) -> Interpretation:
    """
    Three-way split: clean exits 0, leaks exit 1 (not the raw sentinel), and any other
    code is an operational failure whose raw value is passed through.
    """
    outcome = ScanOutcome(raw_code)
    kind = outcome.kind
    if kind == OutcomeKind.CLEAN:
        return Interpretation(outcome, EXIT_OK, CLEAN_MESSAGE)
    if kind == OutcomeKind.LEAKS_DETECTED:
        return Interpretation(outcome, EXIT_LEAKS_DETECTED, LEAKS_MESSAGE)
    return Interpretation(outcome, raw_code, f"ERROR: Unexpected exit code [{raw_code}]")


__all__ = ["CLEAN_MESSAGE", "LEAKS_MESSAGE", "interpret"]
