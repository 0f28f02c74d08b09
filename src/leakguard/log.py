# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for LeakGuard."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("LEAKGUARD_LOG_LEVEL", "INFO").upper()

_WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_workflow_data(value: str) -> str:
    """Escape a message for use in a GitHub workflow command."""
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """
    Render records as GitHub Actions workflow commands.

    Info records are printed as plain lines; debug, warning and error records become
    ``::debug::``, ``::warning::`` and ``::error::`` annotations.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _WORKFLOW_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_workflow_data(message)}"


def running_in_actions() -> bool:
    return os.getenv("GITHUB_ACTIONS", "").strip().lower() == "true"


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    handler = logging.StreamHandler()
    if running_in_actions():
        handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.INFO),
        handlers=[handler],
        force=True,
    )


__all__ = ["WorkflowCommandFormatter", "escape_workflow_data", "running_in_actions", "setup_logging"]
