# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry helper for HttpClient implementations."""

from __future__ import annotations

import logging
import time

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .models import HttpRequest, HttpResponse, RetryConfig

logger = logging.getLogger(__name__)


def build_default_retry_config(settings: HttpSettings | None = None) -> RetryConfig:
    """Create a RetryConfig from environment-backed HttpSettings."""
    return RetryConfig.from_settings(settings or load_http_settings())


def _rate_limited(response: HttpResponse) -> bool:
    if response.status_code == 429:
        return True
    # GitHub signals an exhausted primary rate limit with 403 and a zero remaining count.
    return response.status_code == 403 and response.headers.get("x-ratelimit-remaining") == "0"


def _should_retry(response: HttpResponse) -> bool:
    if response.status_code is None:
        return True
    return response.status_code >= 500 or _rate_limited(response)


def _retry_after(response: HttpResponse) -> float | None:
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def _retry_deadline(request: HttpRequest, cfg: RetryConfig, settings: HttpSettings) -> float | None:
    timeout = request.timeout if request.timeout is not None else settings.timeout
    if not timeout or timeout <= 0:
        return None
    budget = settings.retry_budget_multiplier * cfg.max_attempts * timeout
    if settings.retry_budget_cap and settings.retry_budget_cap > 0:
        budget = min(budget, settings.retry_budget_cap)
    return time.monotonic() + budget


def send_with_retries(
    client: HttpClient,
    request: HttpRequest,
    *,
    retry_config: RetryConfig | None = None,
    settings: HttpSettings | None = None,
) -> HttpResponse:
    """
    Execute a request, retrying transport failures, 5xx responses and rate limits.

    Other HTTP errors are returned as-is on the first attempt. Waits grow by
    `backoff_factor` (a ``Retry-After`` header takes precedence) and never run
    past the retry budget. The returned response records ``retry_count`` in `meta`.
    """
    settings = settings or load_http_settings()
    cfg = retry_config or build_default_retry_config(settings)
    deadline = _retry_deadline(request, cfg, settings)

    delay = cfg.initial_delay
    response: HttpResponse | None = None
    attempt = 0
    while attempt < cfg.max_attempts:
        try:
            response = client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(ok=False, error_message=str(exc), error_type=type(exc).__name__)

        if response.ok or not _should_retry(response):
            if attempt:
                response.meta["retry_count"] = attempt
            return response

        attempt += 1
        if attempt >= cfg.max_attempts:
            break
        wait = _retry_after(response)
        wait = delay if wait is None else wait
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            wait = min(wait, remaining)
        logger.debug(
            "%s %s failed (%s); retrying in %.1fs (%d/%d)",
            request.method,
            request.url,
            response.describe_error(),
            wait,
            attempt,
            cfg.max_attempts - 1,
        )
        time.sleep(wait)
        delay *= cfg.backoff_factor

    if response is None:
        return HttpResponse(ok=False, error_message="Retry budget exhausted", meta={"retry_exhausted": True})
    response.meta["retry_count"] = attempt
    response.meta["retry_exhausted"] = True
    return response


__all__ = ["build_default_retry_config", "send_with_retries"]
