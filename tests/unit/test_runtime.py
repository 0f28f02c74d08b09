# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from leakguard.config import ActionSettings, HttpSettings
from leakguard.constants import (
    EXIT_ENGINE_UNAVAILABLE,
    EXIT_GATE_FAILURE,
    EXIT_UNSUPPORTED_EVENT,
    LEAKS_EXIT_CODE,
    SCAN_CRASH_EXIT_CODE,
)
from leakguard.errors import EngineResolutionFailure, GitHubApiError, LicenseValidationError, ReportingFailure
from leakguard.gate.keygen import KEYGEN_API_URL
from leakguard.gate.license import LicenseGate
from leakguard.http import HttpResponse, StubHttpClient
from leakguard.models import EventKind, OutcomeKind, RunContext
from leakguard.runtime import LeakGuard
from leakguard.scan.engine import Engine
from leakguard.scan.strategy import Strategy


class FakeGitHub:
    def __init__(self, user_type="User", fail=False):
        self.user_type = user_type
        self.fail = fail
        self.lookups = []

    def get_user(self, username):
        self.lookups.append(username)
        if self.fail:
            raise GitHubApiError("Not Found", status_code=404)
        return {"login": username, "type": self.user_type}


class FakeResolver:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = 0

    def resolve(self):
        self.calls += 1
        if self.fail:
            raise EngineResolutionFailure("gitleaks binary not found")
        return Engine("/opt/gitleaks", "8.18.2")


class FakeExecutor:
    def __init__(self, code=0, error=None):
        self.code = code
        self.error = error
        self.calls = []

    def execute(self, strategy, ctx, *, upload_artifact):
        self.calls.append((strategy, upload_artifact))
        if self.error is not None:
            raise self.error
        return self.code


class FakeReporter:
    def __init__(self, error=None):
        self.error = error
        self.reports = []

    def report(self, interpretation, ctx):
        self.reports.append(interpretation)
        if self.error is not None:
            raise self.error


class FakeValidator:
    def __init__(self, error=None):
        self.error = error
        self.keys = []

    def validate(self, license_key, ctx):
        self.keys.append(license_key)
        if self.error is not None:
            raise self.error


def _ctx(kind=EventKind.PUSH, license_key=None, **settings_kwargs):
    settings = ActionSettings(license_key=license_key, **settings_kwargs)
    return RunContext(
        event_kind=kind,
        event_name=kind.value if kind != EventKind.UNSUPPORTED else "release",
        owner_login="acme",
        repository="acme/widgets",
        settings=settings,
        license_credential=license_key,
    )


def _guard(ctx, *, github=None, resolver=None, executor=None, reporter=None, validator=None):
    executor = executor or FakeExecutor()
    guard = LeakGuard(
        ctx.settings,
        http_client=StubHttpClient(),
        github=github or FakeGitHub(),
        gate=LicenseGate(validator or FakeValidator()),
        resolver=resolver or FakeResolver(),
        executor_factory=lambda engine: executor,
        reporter=reporter or FakeReporter(),
    )
    return guard


def test_individual_without_license_scans():
    ctx = _ctx()
    executor, reporter, validator = FakeExecutor(0), FakeReporter(), FakeValidator()
    with _guard(ctx, executor=executor, reporter=reporter, validator=validator) as guard:
        assert guard.run(ctx) == 0
    assert executor.calls == [(Strategy.LINEAR_HISTORY, True)]
    assert [r.kind for r in reporter.reports] == [OutcomeKind.CLEAN]
    assert validator.keys == []


def test_organization_without_license_is_refused():
    ctx = _ctx()
    resolver, executor, reporter = FakeResolver(), FakeExecutor(), FakeReporter()
    guard = _guard(ctx, github=FakeGitHub("Organization"), resolver=resolver, executor=executor, reporter=reporter)
    assert guard.run(ctx) == EXIT_GATE_FAILURE
    assert resolver.calls == 0
    assert executor.calls == []
    assert reporter.reports == []


def test_failed_owner_lookup_requires_license():
    ctx = _ctx()
    reporter = FakeReporter()
    guard = _guard(ctx, github=FakeGitHub(fail=True), reporter=reporter)
    assert guard.run(ctx) == EXIT_GATE_FAILURE
    assert reporter.reports == []


def test_organization_with_valid_license_scans():
    ctx = _ctx(license_key="ABC-123")
    validator = FakeValidator()
    guard = _guard(ctx, github=FakeGitHub("Organization"), validator=validator)
    assert guard.run(ctx) == 0
    assert validator.keys == ["ABC-123"]


def test_organization_with_rejected_license_is_refused():
    ctx = _ctx(license_key="ABC-123")
    executor = FakeExecutor()
    validator = FakeValidator(LicenseValidationError("license is suspended", "SUSPENDED"))
    guard = _guard(ctx, github=FakeGitHub("Organization"), executor=executor, validator=validator)
    assert guard.run(ctx) == EXIT_GATE_FAILURE
    assert executor.calls == []


def test_leaks_exit_one_and_report():
    ctx = _ctx(enable_upload_artifact=False)
    executor, reporter = FakeExecutor(LEAKS_EXIT_CODE), FakeReporter()
    guard = _guard(ctx, executor=executor, reporter=reporter)
    assert guard.run(ctx) == 1
    assert executor.calls == [(Strategy.LINEAR_HISTORY, False)]
    assert [r.kind for r in reporter.reports] == [OutcomeKind.LEAKS_DETECTED]


def test_unexpected_code_passes_through():
    ctx = _ctx(kind=EventKind.WORKFLOW_DISPATCH)
    executor, reporter = FakeExecutor(137), FakeReporter()
    guard = _guard(ctx, executor=executor, reporter=reporter)
    assert guard.run(ctx) == 137
    assert executor.calls[0][0] == Strategy.MANUAL
    assert reporter.reports[0].kind == OutcomeKind.EXECUTION_ERROR


def test_unsupported_event_stops_before_scan():
    ctx = _ctx(kind=EventKind.UNSUPPORTED)
    resolver, executor, reporter = FakeResolver(), FakeExecutor(), FakeReporter()
    guard = _guard(ctx, resolver=resolver, executor=executor, reporter=reporter)
    assert guard.run(ctx) == EXIT_UNSUPPORTED_EVENT
    assert resolver.calls == 0
    assert executor.calls == []
    assert reporter.reports == []


def test_unsupported_event_does_not_validate_license():
    ctx = _ctx(kind=EventKind.UNSUPPORTED, license_key="ABC-123")
    validator = FakeValidator()
    guard = _guard(ctx, github=FakeGitHub("Organization"), validator=validator)
    assert guard.run(ctx) == EXIT_UNSUPPORTED_EVENT
    assert validator.keys == []


def test_malformed_license_response_is_gate_failure():
    ctx = _ctx(license_key="ABC-123")
    http_client = StubHttpClient()
    http_client.add(
        "POST",
        f"{KEYGEN_API_URL}/accounts/gitleaks/licenses/actions/validate-key",
        HttpResponse(ok=True, status_code=200, text=json.dumps({"meta": "oops"})),
    )
    executor, reporter = FakeExecutor(), FakeReporter()
    guard = LeakGuard(
        ctx.settings,
        http_client=http_client,
        http_settings=HttpSettings(max_retries=1),
        github=FakeGitHub("Organization"),
        resolver=FakeResolver(),
        executor_factory=lambda engine: executor,
        reporter=reporter,
    )
    assert guard.run(ctx) == EXIT_GATE_FAILURE
    assert executor.calls == []
    assert reporter.reports == []


def test_engine_failure_stops_before_scan():
    ctx = _ctx()
    executor, reporter = FakeExecutor(), FakeReporter()
    guard = _guard(ctx, resolver=FakeResolver(fail=True), executor=executor, reporter=reporter)
    assert guard.run(ctx) == EXIT_ENGINE_UNAVAILABLE
    assert executor.calls == []
    assert reporter.reports == []


def test_executor_crash_is_reported_once():
    ctx = _ctx()
    reporter = FakeReporter()
    guard = _guard(ctx, executor=FakeExecutor(error=FileNotFoundError("gitleaks")), reporter=reporter)
    assert guard.run(ctx) == SCAN_CRASH_EXIT_CODE
    assert len(reporter.reports) == 1
    assert reporter.reports[0].outcome.raw_code == SCAN_CRASH_EXIT_CODE


@pytest.mark.parametrize("error", [ReportingFailure("disk full"), OSError("disk full")])
def test_reporter_failure_keeps_exit_code(error):
    ctx = _ctx()
    reporter = FakeReporter(error=error)
    guard = _guard(ctx, executor=FakeExecutor(LEAKS_EXIT_CODE), reporter=reporter)
    assert guard.run(ctx) == 1
    assert len(reporter.reports) == 1


@pytest.mark.parametrize("code", [0, LEAKS_EXIT_CODE, 1, 255])
def test_report_runs_exactly_once(code):
    ctx = _ctx()
    reporter = FakeReporter()
    _guard(ctx, executor=FakeExecutor(code), reporter=reporter).run(ctx)
    assert len(reporter.reports) == 1


def test_close_closes_http_client():
    ctx = _ctx()
    client = StubHttpClient()
    guard = LeakGuard(
        ctx.settings,
        http_client=client,
        github=FakeGitHub(),
        resolver=FakeResolver(),
        reporter=FakeReporter(),
    )
    with guard:
        pass
    assert client.closed


def test_default_github_client_uses_settings():
    settings = ActionSettings(api_url="https://ghe.example/api/v3", github_token="abc")
    with LeakGuard(settings, http_client=StubHttpClient(), http_settings=HttpSettings()) as guard:
        assert guard.github.api_url == "https://ghe.example/api/v3"
        assert guard.github.token == "abc"
        assert guard.github.http_settings is guard.http_settings
