# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient used by tests and dry runs."""

from __future__ import annotations

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient keyed by ``(method, url)``."""

    def __init__(self, responses: dict[tuple[str, str], HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, method: str, url: str, response: HttpResponse) -> None:
        self._responses[(method.upper(), url)] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        key = (request.method.upper(), request.url)
        if key in self._responses:
            return self._responses[key]
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    def close(self) -> None:
        self.closed = True
