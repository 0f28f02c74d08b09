# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import time

import pytest

from leakguard.config import ActionSettings, HttpSettings
from leakguard.errors import LicenseValidationError
from leakguard.gate.keygen import KEYGEN_API_URL, KeygenLicenseValidator
from leakguard.http.adapters import StubHttpClient
from leakguard.http.models import HttpResponse
from leakguard.models import EventKind, RunContext

BASE = f"{KEYGEN_API_URL}/accounts/gitleaks"
VALIDATE_URL = f"{BASE}/licenses/actions/validate-key"
MACHINES_URL = f"{BASE}/machines"


def _json_response(status, payload):
    return HttpResponse(ok=200 <= status < 300, status_code=status, text=json.dumps(payload))


def _ctx():
    return RunContext(
        event_kind=EventKind.PUSH,
        event_name="push",
        owner_login="acme",
        repository="acme/widgets",
        settings=ActionSettings(license_key="key"),
        license_credential="key",
    )


def _validator(client):
    return KeygenLicenseValidator(client, account="gitleaks", http_settings=HttpSettings(max_retries=1))


def test_valid_key_passes():
    client = StubHttpClient()
    client.add("POST", VALIDATE_URL, _json_response(200, {"meta": {"valid": True, "code": "VALID"}}))
    _validator(client).validate("key", _ctx())
    sent = json.loads(client.requests[0].body)
    assert sent["meta"] == {"key": "key", "scope": {"fingerprint": "acme/widgets"}}
    assert client.requests[0].headers["Content-Type"] == "application/vnd.api+json"


@pytest.mark.parametrize("code", ["FINGERPRINT_SCOPE_MISMATCH", "NO_MACHINE", "NO_MACHINES"])
def test_unactivated_repository_is_activated(code):
    client = StubHttpClient()
    client.add(
        "POST",
        VALIDATE_URL,
        _json_response(200, {"meta": {"valid": False, "code": code}, "data": {"id": "lic-1"}}),
    )
    client.add("POST", MACHINES_URL, _json_response(201, {"data": {"id": "machine-1"}}))
    _validator(client).validate("key", _ctx())
    activation = client.requests[1]
    assert activation.headers["Authorization"] == "License key"
    body = json.loads(activation.body)
    assert body["data"]["attributes"]["fingerprint"] == "acme/widgets"
    assert body["data"]["relationships"]["license"]["data"]["id"] == "lic-1"


def test_failed_activation_is_rejected():
    client = StubHttpClient()
    client.add(
        "POST",
        VALIDATE_URL,
        _json_response(200, {"meta": {"valid": False, "code": "NO_MACHINES"}, "data": {"id": "lic-1"}}),
    )
    client.add("POST", MACHINES_URL, _json_response(422, {"errors": [{"detail": "machine limit"}]}))
    with pytest.raises(LicenseValidationError) as excinfo:
        _validator(client).validate("key", _ctx())
    assert excinfo.value.code == "ACTIVATION_FAILED"
    assert "machine limit" in str(excinfo.value)


def test_too_many_machines_is_rejected():
    client = StubHttpClient()
    client.add("POST", VALIDATE_URL, _json_response(200, {"meta": {"valid": False, "code": "TOO_MANY_MACHINES"}}))
    with pytest.raises(LicenseValidationError) as excinfo:
        _validator(client).validate("key", _ctx())
    assert excinfo.value.code == "TOO_MANY_MACHINES"


@pytest.mark.parametrize("code", ["EXPIRED", "SUSPENDED", "NOT_FOUND"])
def test_invalid_codes_are_rejected(code):
    client = StubHttpClient()
    client.add(
        "POST",
        VALIDATE_URL,
        _json_response(200, {"meta": {"valid": False, "code": code, "detail": "license is bad"}}),
    )
    with pytest.raises(LicenseValidationError) as excinfo:
        _validator(client).validate("key", _ctx())
    assert excinfo.value.code == code


def test_unreachable_license_server_is_rejected(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda _: None)
    client = StubHttpClient()
    with pytest.raises(LicenseValidationError) as excinfo:
        _validator(client).validate("key", _ctx())
    assert "could not reach" in str(excinfo.value)


def test_malformed_response_is_rejected():
    client = StubHttpClient()
    client.add("POST", VALIDATE_URL, HttpResponse(ok=True, status_code=200, text="<html>"))
    with pytest.raises(LicenseValidationError):
        _validator(client).validate("key", _ctx())


@pytest.mark.parametrize(
    "payload",
    [
        {"meta": "oops"},
        {"meta": {"valid": False, "code": "NO_MACHINE"}, "data": ["lic-1"]},
        ["not", "an", "object"],
    ],
)
def test_malformed_validation_body_fails_closed(payload):
    client = StubHttpClient()
    client.add("POST", VALIDATE_URL, _json_response(200, payload))
    with pytest.raises(LicenseValidationError):
        _validator(client).validate("key", _ctx())
    assert [r.url for r in client.requests] == [VALIDATE_URL]
