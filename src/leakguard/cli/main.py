# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""LeakGuard CLI, the action's entrypoint."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import replace

from ..config import ActionSettings, load_action_settings, load_http_settings
from ..errors import ConfigurationError
from ..github.event import load_run_context
from ..http import create_default_http_client
from ..log import setup_logging
from ..runtime import LeakGuard

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LeakGuard: license-gated gitleaks scan for GitHub Actions events")
    parser.add_argument(
        "--event-path",
        help="Path to the event payload JSON (default: $GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--event-name",
        help="Triggering event name (default: $GITHUB_EVENT_NAME)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: $LEAKGUARD_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Do not write the job summary",
    )
    parser.add_argument(
        "--no-upload-artifact",
        action="store_true",
        help="Do not stage the SARIF report as an artifact",
    )
    return parser


def _apply_overrides(settings: ActionSettings, args: argparse.Namespace) -> ActionSettings:
    overrides: dict[str, bool] = {}
    if args.no_summary:
        logger.debug("Disabling GitHub Actions Summary.")
        overrides["enable_summary"] = False
    if args.no_upload_artifact:
        logger.debug("Disabling uploading of results.sarif artifact.")
        overrides["enable_upload_artifact"] = False
    return replace(settings, **overrides) if overrides else settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = _apply_overrides(load_action_settings(), args)
    try:
        ctx = load_run_context(settings, event_path=args.event_path, event_name=args.event_name, environ=os.environ)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return exc.exit_code

    http_settings = load_http_settings()
    http_client = create_default_http_client(http_settings)

    with LeakGuard(settings, http_client=http_client, http_settings=http_settings) as guard:
        return guard.run(ctx)


if __name__ == "__main__":
    raise SystemExit(main())
