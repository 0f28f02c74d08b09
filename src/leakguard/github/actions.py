# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GitHub Actions runner files: step outputs and the job summary."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


def set_output(output_path: str | None, name: str, value: object) -> None:
    """Append ``name=value`` to $GITHUB_OUTPUT; a no-op outside a runner."""
    if not output_path:
        logger.debug("No GITHUB_OUTPUT file; skipping output %s=%s", name, value)
        return
    text = str(value)
    with open(output_path, "a", encoding="utf-8") as f:
        if "\n" in text:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
        else:
            f.write(f"{name}={text}\n")


def append_step_summary(summary_path: str | None, markdown: str) -> Path:
    """Append Markdown to $GITHUB_STEP_SUMMARY and return the file path."""
    if not summary_path:
        raise FileNotFoundError("GITHUB_STEP_SUMMARY is not set; cannot write the job summary")
    path = Path(summary_path)
    with path.open("a", encoding="utf-8") as f:
        f.write(markdown)
        if not markdown.endswith("\n"):
            f.write("\n")
    return path


__all__ = ["append_step_summary", "set_output"]
