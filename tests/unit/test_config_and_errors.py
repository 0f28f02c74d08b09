# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from leakguard import config
from leakguard.config import ActionSettings, ManualScanMode
from leakguard.errors import (
    ErrorCategory,
    GitHubApiError,
    categorize_exception,
    categorize_response,
    categorize_status,
    error_category_to_reason,
)
from leakguard.http.models import HttpResponse


def test_action_settings_defaults():
    settings = ActionSettings.from_env({})
    assert settings.license_key is None
    assert settings.enable_summary is True
    assert settings.enable_upload_artifact is True
    assert settings.enable_comments is True
    assert settings.manual_scan_mode == ManualScanMode.FULL
    assert settings.report_path == "results.sarif"
    assert settings.artifact_dir == ".gitleaks-artifacts"
    assert settings.api_url == "https://api.github.com"


@pytest.mark.parametrize("value", ["false", "FALSE", "0", " false "])
def test_toggles_disabled_only_by_false_or_zero(value):
    settings = ActionSettings.from_env(
        {
            "GITLEAKS_ENABLE_SUMMARY": value,
            "GITLEAKS_ENABLE_UPLOAD_ARTIFACT": value,
            "GITLEAKS_ENABLE_COMMENTS": value,
        }
    )
    assert settings.enable_summary is False
    assert settings.enable_upload_artifact is False
    assert settings.enable_comments is False


@pytest.mark.parametrize("value", ["true", "1", "", "no"])
def test_toggles_stay_enabled_for_other_values(value):
    settings = ActionSettings.from_env({"GITLEAKS_ENABLE_SUMMARY": value})
    assert settings.enable_summary is True


def test_action_settings_env_values():
    settings = ActionSettings.from_env(
        {
            "GITLEAKS_LICENSE": " key-123 ",
            "GITLEAKS_VERSION": "8.18.0",
            "GITLEAKS_NOTIFY_USER_LIST": "@alice, @bob,,",
            "GITLEAKS_MANUAL_SCAN_MODE": "LATEST",
            "GITHUB_API_URL": "https://ghe.example/api/v3/",
            "RUNNER_TEMP": "/tmp/runner",
            "GITHUB_REPOSITORY": "acme/widgets",
        }
    )
    assert settings.license_key == "key-123"
    assert settings.gitleaks_version == "8.18.0"
    assert settings.notify_users == ("@alice", "@bob")
    assert settings.manual_scan_mode == ManualScanMode.LATEST
    assert settings.api_url == "https://ghe.example/api/v3"
    assert settings.artifact_dir == "/tmp/runner/gitleaks-artifacts"
    assert settings.github_repository == "acme/widgets"


def test_blank_license_is_absent():
    assert ActionSettings.from_env({"GITLEAKS_LICENSE": "   "}).license_key is None


def test_unknown_manual_mode_falls_back_to_full():
    assert ManualScanMode.parse("everything") == ManualScanMode.FULL
    assert ManualScanMode.parse(None) == ManualScanMode.FULL


def test_resolved_report_path(tmp_path):
    relative = ActionSettings(workspace=str(tmp_path))
    assert relative.resolved_report_path() == tmp_path / "results.sarif"
    absolute = ActionSettings(report_path=str(tmp_path / "out.sarif"), workspace="/elsewhere")
    assert absolute.resolved_report_path() == tmp_path / "out.sarif"


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("LEAKGUARD_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("LEAKGUARD_HTTP_RETRIES", "0")
    monkeypatch.setenv("LEAKGUARD_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("LEAKGUARD_HTTP_VERIFY_SSL", "0")
    settings = config.load_http_settings()
    assert settings.timeout == 5.5
    assert settings.max_retries == 0
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("LEAKGUARD_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("LEAKGUARD_HTTP_RETRIES", "ten")
    monkeypatch.setenv("LEAKGUARD_HTTP_MAX_BODY_BYTES", "-1")
    settings = config.load_http_settings()
    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_retries == config.HttpSettings.max_retries
    assert settings.max_body_bytes == config.HttpSettings.max_body_bytes


def test_categorize_status():
    assert categorize_status(404) == ErrorCategory.NOT_FOUND
    assert categorize_status(429) == ErrorCategory.RATE_LIMITED
    assert categorize_status(403) == ErrorCategory.AUTH_ERROR
    assert categorize_status(502) == ErrorCategory.SERVER_ERROR
    assert categorize_status(200) == ErrorCategory.NONE
    assert categorize_status(None) == ErrorCategory.UNKNOWN_ERROR


def test_categorize_response_transport_errors():
    assert categorize_response(HttpResponse(ok=False, error_type="ReadTimeout")) == ErrorCategory.TIMEOUT
    assert categorize_response(HttpResponse(ok=False, error_type="ConnectError")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_response(HttpResponse(ok=False, error_type="ValueError")) == ErrorCategory.UNKNOWN_ERROR
    assert categorize_response(HttpResponse(ok=False, status_code=404)) == ErrorCategory.NOT_FOUND


def test_categorize_exception():
    assert categorize_exception(httpx.ReadTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("down")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    api_error = GitHubApiError("nope", status_code=404, category=ErrorCategory.NOT_FOUND)
    assert categorize_exception(api_error) == ErrorCategory.NOT_FOUND
    assert categorize_exception(RuntimeError("x")) == ErrorCategory.UNKNOWN_ERROR


def test_error_category_reasons():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "request timed out"
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""
