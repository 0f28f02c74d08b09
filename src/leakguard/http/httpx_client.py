# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def _read_capped(chunks: Iterable[bytes], limit: int) -> tuple[bytes, bool]:
    """Collect at most `limit` bytes; the flag is True when the body was cut short."""
    buffer = bytearray()
    for chunk in chunks:
        room = limit - len(buffer)
        if len(chunk) > room:
            buffer.extend(chunk[:room])
            return bytes(buffer), True
        buffer.extend(chunk)
    return bytes(buffer), False


def _decode(content: bytes, encoding: str | None) -> str:
    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


class HttpxClient(HttpClient):
    """
    Synchronous httpx client used for the GitHub and Keygen APIs.

    Transport errors are returned as a failed HttpResponse carrying the exception
    type name rather than raised, so callers handle them with the same code path as
    HTTP errors.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=True,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = {"User-Agent": self.settings.user_agent, **(request.headers or {})}
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        limit = self.settings.max_body_bytes if self.settings.max_body_bytes > 0 else HttpSettings.max_body_bytes

        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                params=request.params,
                content=request.body,
                timeout=timeout,
            ) as resp:
                content, truncated = _read_capped(resp.iter_bytes(), limit)
                text = _decode(content, resp.encoding)
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            return HttpResponse(ok=False, url=request.url, error_message=str(exc), error_type=type(exc).__name__)

        if truncated:
            logger.debug("Response body from %s truncated at %d bytes", request.url, limit)
        return HttpResponse(
            ok=resp.is_success,
            status_code=resp.status_code,
            headers={key.lower(): value for key, value in resp.headers.items()},
            text=text,
            content=content,
            url=str(resp.url),
            meta={"body_truncated": truncated},
        )

    def close(self) -> None:
        self._client.close()


__all__ = ["HttpxClient"]
