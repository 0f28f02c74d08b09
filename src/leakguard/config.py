# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for LeakGuard."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .version import __version__

DEFAULT_USER_AGENT = f"LeakGuard/{__version__} (+https://github.com/gitleaks/gitleaks-action)"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_SERVER_URL = "https://github.com"
DEFAULT_REPORT_PATH = "results.sarif"
DEFAULT_KEYGEN_ACCOUNT = "gitleaks"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _enabled_flag(environ: Mapping[str, str], name: str) -> bool:
    """Feature toggles default to on and are only switched off by ``false`` or ``0``."""
    value = environ.get(name)
    if value is None:
        return True
    return value.strip().lower() not in {"false", "0"}


def _optional_str(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    retry_budget_multiplier: float = 10.0
    retry_budget_cap: float = 200.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("LEAKGUARD_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=_float_env("LEAKGUARD_HTTP_TIMEOUT", cls.timeout),
            max_retries=_int_env("LEAKGUARD_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("LEAKGUARD_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("LEAKGUARD_HTTP_INITIAL_DELAY", cls.initial_delay),
            retry_budget_multiplier=_float_env("LEAKGUARD_HTTP_RETRY_BUDGET_MULTIPLIER", cls.retry_budget_multiplier),
            retry_budget_cap=_float_env("LEAKGUARD_HTTP_RETRY_BUDGET_CAP", cls.retry_budget_cap),
            user_agent=os.getenv("LEAKGUARD_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("LEAKGUARD_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


class ManualScanMode(str, Enum):
    """How much history a manually dispatched run scans."""

    FULL = "full"
    LATEST = "latest"

    @classmethod
    def parse(cls, value: str | None) -> "ManualScanMode":
        raw = (value or "").strip().lower()
        for mode in cls:
            if mode.value == raw:
                return mode
        return cls.FULL


@dataclass(frozen=True)
class ActionSettings:
    """
    Run-wide configuration, read once from the environment at startup.

    Feature toggles follow the action's historical contract: they are enabled unless
    explicitly set to ``false`` or ``0``.
    """

    license_key: str | None = None
    gitleaks_version: str | None = None
    gitleaks_path: str | None = None
    gitleaks_config: str | None = None
    enable_summary: bool = True
    enable_upload_artifact: bool = True
    enable_comments: bool = True
    notify_users: tuple[str, ...] = ()
    manual_scan_mode: ManualScanMode = ManualScanMode.FULL
    report_path: str = DEFAULT_REPORT_PATH
    artifact_dir: str = ".gitleaks-artifacts"
    keygen_account: str = DEFAULT_KEYGEN_ACCOUNT
    github_token: str | None = None
    github_repository: str | None = None
    api_url: str = DEFAULT_API_URL
    server_url: str = DEFAULT_SERVER_URL
    workspace: str = "."
    step_summary_path: str | None = None
    output_path: str | None = None
    tool_cache: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionSettings":
        env = os.environ if environ is None else environ
        runner_temp = _optional_str(env, "RUNNER_TEMP")
        default_artifact_dir = str(Path(runner_temp) / "gitleaks-artifacts") if runner_temp else cls.artifact_dir
        notify_raw = env.get("GITLEAKS_NOTIFY_USER_LIST") or ""
        return cls(
            license_key=_optional_str(env, "GITLEAKS_LICENSE"),
            gitleaks_version=_optional_str(env, "GITLEAKS_VERSION"),
            gitleaks_path=_optional_str(env, "GITLEAKS_PATH"),
            gitleaks_config=_optional_str(env, "GITLEAKS_CONFIG"),
            enable_summary=_enabled_flag(env, "GITLEAKS_ENABLE_SUMMARY"),
            enable_upload_artifact=_enabled_flag(env, "GITLEAKS_ENABLE_UPLOAD_ARTIFACT"),
            enable_comments=_enabled_flag(env, "GITLEAKS_ENABLE_COMMENTS"),
            notify_users=tuple(user.strip() for user in notify_raw.split(",") if user.strip()),
            manual_scan_mode=ManualScanMode.parse(env.get("GITLEAKS_MANUAL_SCAN_MODE")),
            report_path=_optional_str(env, "GITLEAKS_REPORT_PATH") or cls.report_path,
            artifact_dir=_optional_str(env, "GITLEAKS_ARTIFACT_DIR") or default_artifact_dir,
            keygen_account=_optional_str(env, "GITLEAKS_KEYGEN_ACCOUNT") or cls.keygen_account,
            github_token=_optional_str(env, "GITHUB_TOKEN"),
            github_repository=_optional_str(env, "GITHUB_REPOSITORY"),
            api_url=(_optional_str(env, "GITHUB_API_URL") or cls.api_url).rstrip("/"),
            server_url=(_optional_str(env, "GITHUB_SERVER_URL") or cls.server_url).rstrip("/"),
            workspace=_optional_str(env, "GITHUB_WORKSPACE") or cls.workspace,
            step_summary_path=_optional_str(env, "GITHUB_STEP_SUMMARY"),
            output_path=_optional_str(env, "GITHUB_OUTPUT"),
            tool_cache=_optional_str(env, "RUNNER_TOOL_CACHE"),
        )

    def resolved_report_path(self) -> Path:
        """The SARIF report location; relative paths are under the workspace, where gitleaks runs."""
        path = Path(self.report_path)
        return path if path.is_absolute() else Path(self.workspace) / path


def load_action_settings(environ: Mapping[str, str] | None = None) -> ActionSettings:
    """Load the run configuration from the environment."""
    return ActionSettings.from_env(environ)


__all__ = [
    "ActionSettings",
    "DEFAULT_USER_AGENT",
    "HttpSettings",
    "ManualScanMode",
    "load_action_settings",
    "load_http_settings",
]
