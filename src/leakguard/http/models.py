# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across LeakGuard."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from ..config import HttpSettings

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    params: dict[str, str] | None = None
    timeout: float | None = None

    @classmethod
    def json_request(cls, url: str, payload: Any, *, method: str = "POST", headers: Headers | None = None) -> HttpRequest:
        """Build a request with a JSON-encoded body."""
        merged = dict(headers or {})
        merged.setdefault("Content-Type", "application/json")
        return cls(url=url, method=method, headers=merged, body=json.dumps(payload))


@dataclass
class HttpResponse:
    """Normalized HTTP response."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def json(self) -> Any:
        """Decode the body as JSON; raises ValueError on malformed bodies."""
        return json.loads(self.text or "null")

    def describe_error(self) -> str:
        if self.error_message:
            return self.error_message
        if self.status_code is not None:
            return f"HTTP {self.status_code}"
        return "request failed"


@dataclass
class RetryConfig:
    """Retry policy for HTTP requests derived from HttpSettings."""

    max_attempts: int = 3
    backoff_factor: float = 2.0
    initial_delay: float = 1.0

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> RetryConfig:
        """Build a retry config from the shared HttpSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
        )
