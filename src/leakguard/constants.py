# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exit codes and engine constants shared across LeakGuard."""

# Exit status gitleaks is told to use (``--exit-code``) when it finds leaks.
LEAKS_EXIT_CODE = 2

EXIT_OK = 0
EXIT_LEAKS_DETECTED = 1
EXIT_UNSUPPORTED_EVENT = 64  # EX_USAGE
EXIT_ENGINE_UNAVAILABLE = 69  # EX_UNAVAILABLE
# Used as the raw scan code when the scan stage raised before gitleaks produced one.
SCAN_CRASH_EXIT_CODE = 70  # EX_SOFTWARE
EXIT_GATE_FAILURE = 77  # EX_NOPERM
EXIT_CONFIGURATION_ERROR = 78  # EX_CONFIG

GITLEAKS_OWNER = "zricethezav"
GITLEAKS_REPO = "gitleaks"
GITLEAKS_BINARY = "gitleaks"
ARTIFACT_NAME = "gitleaks-results.sarif"
ZERO_SHA = "0" * 40
