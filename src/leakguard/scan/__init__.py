# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan orchestration: strategy, engine resolution, execution and outcome."""

from .engine import Engine, EngineResolver
from .executor import ScanExecutor
from .outcome import interpret
from .runner import GitleaksRunner
from .strategy import ScanPlan, Strategy, plan_scan, select_strategy

__all__ = [
    "Engine",
    "EngineResolver",
    "GitleaksRunner",
    "ScanExecutor",
    "ScanPlan",
    "Strategy",
    "interpret",
    "plan_scan",
    "select_strategy",
]
