# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Stage the SARIF report where a follow-up upload-artifact step picks it up."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..config import ActionSettings
from ..constants import ARTIFACT_NAME
from ..github.actions import set_output

logger = logging.getLogger(__name__)


class ArtifactStager:
    def __init__(self, settings: ActionSettings):
        self.settings = settings

    def upload(self) -> Path:
        source = self.settings.resolved_report_path()
        target_dir = Path(self.settings.artifact_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / ARTIFACT_NAME
        shutil.copyfile(source, target)
        set_output(self.settings.output_path, "artifact-path", str(target))
        logger.info("Staged %s as artifact %s", source, target)
        return target


__all__ = ["ArtifactStager"]
