# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run the gitleaks binary for a scan plan."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from typing import Any

from ..config import ActionSettings
from ..constants import LEAKS_EXIT_CODE
from .engine import Engine
from .strategy import ScanPlan

logger = logging.getLogger(__name__)

CommandRunner = Callable[..., "subprocess.CompletedProcess[Any]"]


# 0 means clean and 1 is gitleaks' own generic failure code; neither can signal leaks.
if LEAKS_EXIT_CODE in (0, 1) or not 0 < LEAKS_EXIT_CODE < 256:  # pragma: no cover - guards edits to the constant
    raise RuntimeError(f"invalid leaks exit code {LEAKS_EXIT_CODE}")


class GitleaksRunner:
    """Runs ``gitleaks detect``; leaks are signalled with the same sentinel `interpret` reads."""

    leaks_exit_code = LEAKS_EXIT_CODE

    def __init__(
        self,
        engine: Engine,
        settings: ActionSettings,
        *,
        run: CommandRunner = subprocess.run,
    ):
        self.engine = engine
        self.settings = settings
        self._run = run

    def build_args(self, plan: ScanPlan) -> list[str]:
        args = [
            self.engine.path,
            "detect",
            "--redact",
            "-v",
            f"--exit-code={self.leaks_exit_code}",
            "--report-format=sarif",
            f"--report-path={self.settings.report_path}",
            "--log-level=debug",
        ]
        if self.settings.gitleaks_config:
            args.append(f"--config={self.settings.gitleaks_config}")
        if plan.log_opts:
            args.append(f"--log-opts={plan.log_opts}")
        return args

    def run(self, plan: ScanPlan) -> int:
        args = self.build_args(plan)
        logger.info("gitleaks cmd: %s", " ".join(args))
        completed = self._run(args, cwd=self.settings.workspace, check=False)
        code = int(completed.returncode)
        if code < 0:
            # Killed by a signal; report it the way a shell would.
            code = 128 + abs(code)
        return code


__all__ = ["GitleaksRunner"]
