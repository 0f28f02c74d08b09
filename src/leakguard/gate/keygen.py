# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Keygen-backed license validation."""

from __future__ import annotations

import logging
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import LicenseValidationError
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..http.retry import send_with_retries
from ..models.context import RunContext

logger = logging.getLogger(__name__)

KEYGEN_API_URL = "https://api.keygen.sh/v1"
JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

# Validation codes that mean "the key is fine, this repository is just not activated yet".
ACTIVATION_CODES = {"FINGERPRINT_SCOPE_MISMATCH", "NO_MACHINE", "NO_MACHINES"}


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


class KeygenLicenseValidator:
    """
    Validates a license key scoped to the repository, activating the repository as a
    machine when the license has not seen it before.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        account: str,
        api_url: str = KEYGEN_API_URL,
        http_settings: HttpSettings | None = None,
    ):
        self.http_client = http_client
        self.account = account
        self.base_url = f"{api_url.rstrip('/')}/accounts/{account}"
        self.http_settings = http_settings or load_http_settings()

    def _post(self, path: str, payload: dict[str, Any], *, license_key: str | None = None) -> HttpResponse:
        headers = {"Accept": JSONAPI_MEDIA_TYPE, "Content-Type": JSONAPI_MEDIA_TYPE}
        if license_key:
            headers["Authorization"] = f"License {license_key}"
        request = HttpRequest.json_request(f"{self.base_url}{path}", payload, headers=headers)
        response = send_with_retries(self.http_client, request, settings=self.http_settings)
        if response.status_code is None:
            raise LicenseValidationError(f"could not reach the license server: {response.describe_error()}")
        return response

    @staticmethod
    def _decode(response: HttpResponse) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise LicenseValidationError(f"license server returned malformed JSON (HTTP {response.status_code})") from exc
        return data if isinstance(data, dict) else {}

    def validate(self, license_key: str, ctx: RunContext) -> None:
        fingerprint = ctx.repository
        payload = {"meta": {"key": license_key, "scope": {"fingerprint": fingerprint}}}
        response = self._post("/licenses/actions/validate-key", payload)
        data = self._decode(response)

        meta = _mapping(data.get("meta"))
        code = str(meta.get("code") or "")
        if meta.get("valid") is True:
            logger.debug("License key valid for [%s]", fingerprint)
            return

        if code in ACTIVATION_CODES:
            license_id = _mapping(data.get("data")).get("id")
            if not license_id:
                raise LicenseValidationError("license server did not return a license id", code=code)
            self._activate(license_key, str(license_id), fingerprint)
            return

        if code == "TOO_MANY_MACHINES":
            raise LicenseValidationError(
                "the license has reached its repository limit; contact gitleaks to upgrade",
                code=code,
            )

        detail = meta.get("detail") or self._first_error(data) or f"HTTP {response.status_code}"
        raise LicenseValidationError(f"license key is not valid: {detail} [{code or 'UNKNOWN'}]", code=code or None)

    def _activate(self, license_key: str, license_id: str, fingerprint: str) -> None:
        logger.info("Activating repository [%s] on the gitleaks license.", fingerprint)
        payload = {
            "data": {
                "type": "machines",
                "attributes": {"fingerprint": fingerprint, "name": fingerprint},
                "relationships": {"license": {"data": {"type": "licenses", "id": license_id}}},
            }
        }
        response = self._post("/machines", payload, license_key=license_key)
        if response.status_code not in (200, 201):
            detail = self._first_error(self._decode(response)) or f"HTTP {response.status_code}"
            raise LicenseValidationError(f"could not activate [{fingerprint}]: {detail}", code="ACTIVATION_FAILED")
        logger.info("Repository [%s] activated.", fingerprint)

    @staticmethod
    def _first_error(data: dict[str, Any]) -> str | None:
        errors = data.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            first = errors[0]
            return str(first.get("detail") or first.get("title") or "") or None
        return None


__all__ = ["ACTIVATION_CODES", "KEYGEN_API_URL", "KeygenLicenseValidator"]
