# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Resolve which gitleaks version to run and where its binary lives."""

from __future__ import annotations

import logging
import os
import platform
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..config import ActionSettings
from ..constants import GITLEAKS_BINARY, GITLEAKS_OWNER, GITLEAKS_REPO
from ..errors import EngineResolutionFailure, LeakGuardError

logger = logging.getLogger(__name__)

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "x32",
    "i686": "x32",
}


class ReleaseLookup(Protocol):
    def get_latest_release_tag(self, owner: str, repo: str) -> str: ...


@dataclass(frozen=True)
class Engine:
    path: str
    version: str


def runner_arch() -> str:
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


class EngineResolver:
    """
    Locates an installed gitleaks binary.

    The version comes from ``GITLEAKS_VERSION`` or, when unset, from the latest
    GitHub release. The binary is looked up at ``GITLEAKS_PATH``, then in the runner
    tool cache for that version, then on ``PATH``. Any failure is fatal.
    """

    def __init__(
        self,
        releases: ReleaseLookup,
        settings: ActionSettings,
        *,
        which: Callable[[str], str | None] = shutil.which,
    ):
        self.releases = releases
        self.settings = settings
        self.which = which

    def resolve_version(self) -> str:
        if self.settings.gitleaks_version and self.settings.gitleaks_version != "latest":
            return self.settings.gitleaks_version.lstrip("v")
        try:
            tag = self.releases.get_latest_release_tag(GITLEAKS_OWNER, GITLEAKS_REPO)
        except LeakGuardError as exc:
            raise EngineResolutionFailure(f"Could not determine the latest gitleaks version: {exc}") from exc
        return tag.lstrip("v")

    def _candidates(self, version: str) -> list[Path]:
        candidates: list[Path] = []
        if self.settings.gitleaks_path:
            explicit = Path(self.settings.gitleaks_path)
            candidates.append(explicit / GITLEAKS_BINARY if explicit.is_dir() else explicit)
        if self.settings.tool_cache:
            cached = Path(self.settings.tool_cache) / GITLEAKS_BINARY / version / runner_arch()
            candidates.append(cached / GITLEAKS_BINARY)
        on_path = self.which(GITLEAKS_BINARY)
        if on_path:
            candidates.append(Path(on_path))
        return candidates

    def resolve(self) -> Engine:
        version = self.resolve_version()
        logger.info("gitleaks version: %s", version)
        for candidate in self._candidates(version):
            if candidate.is_file() and os.access(candidate, os.X_OK):
                logger.debug("Using gitleaks binary at %s", candidate)
                return Engine(path=str(candidate), version=version)
            logger.debug("No usable gitleaks binary at %s", candidate)
        raise EngineResolutionFailure(
            f"gitleaks {version} is not installed; set GITLEAKS_PATH or add gitleaks to PATH"
        )


__all__ = ["Engine", "EngineResolver", "runner_arch"]
