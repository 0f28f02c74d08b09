# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Thin GitHub REST client on top of the HttpClient protocol."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from ..config import ActionSettings, HttpSettings, load_http_settings
from ..errors import GitHubApiError, categorize_response, error_category_to_reason
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..http.retry import send_with_retries

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"
PAGE_SIZE = 100


class GitHubClient:
    """The handful of REST endpoints a scan run needs."""

    def __init__(
        self,
        http_client: HttpClient,
        *,
        api_url: str = "https://api.github.com",
        token: str | None = None,
        http_settings: HttpSettings | None = None,
    ):
        self.http_client = http_client
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.http_settings = http_settings or load_http_settings()

    @classmethod
    def from_settings(
        cls,
        http_client: HttpClient,
        settings: ActionSettings,
        *,
        http_settings: HttpSettings | None = None,
    ) -> GitHubClient:
        return cls(http_client, api_url=settings.api_url, token=settings.github_token, http_settings=http_settings)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        payload: Any = None,
    ) -> HttpResponse:
        url = f"{self.api_url}{path}"
        if payload is not None:
            request = HttpRequest.json_request(url, payload, method=method, headers=self._headers())
        else:
            request = HttpRequest(url=url, method=method, headers=self._headers(), params=params)
        response = send_with_retries(self.http_client, request, settings=self.http_settings)
        if not response.ok:
            category = categorize_response(response)
            reason = error_category_to_reason(category)
            raise GitHubApiError(
                f"{method} {path} failed: {response.describe_error()} ({reason})",
                status_code=response.status_code,
                category=category,
            )
        return response

    def _json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._send(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise GitHubApiError(f"{method} {path} returned malformed JSON: {exc}", status_code=response.status_code) from exc

    def _paginate(self, path: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = self._json("GET", path, params={"per_page": str(PAGE_SIZE), "page": str(page)})
            if not isinstance(batch, list):
                raise GitHubApiError(f"GET {path} returned {type(batch).__name__}, expected a list")
            items.extend(item for item in batch if isinstance(item, dict))
            if len(batch) < PAGE_SIZE:
                return items
            page += 1

    def get_user(self, username: str) -> dict[str, Any]:
        """GET /users/{username}."""
        data = self._json("GET", f"/users/{quote(username, safe='')}")
        if not isinstance(data, dict):
            raise GitHubApiError(f"GET /users/{username} returned an unexpected payload")
        return data

    def get_latest_release_tag(self, owner: str, repo: str) -> str:
        """Return the tag name of the repository's latest release."""
        data = self._json("GET", f"/repos/{owner}/{repo}/releases/latest")
        tag = data.get("tag_name") if isinstance(data, dict) else None
        if not tag:
            raise GitHubApiError(f"Latest release of {owner}/{repo} has no tag_name")
        return str(tag)

    def list_pull_request_commits(self, repository: str, pull_number: int) -> list[dict[str, Any]]:
        return self._paginate(f"/repos/{repository}/pulls/{pull_number}/commits")

    def list_review_comments(self, repository: str, pull_number: int) -> list[dict[str, Any]]:
        return self._paginate(f"/repos/{repository}/pulls/{pull_number}/comments")

    def create_review_comment(
        self,
        repository: str,
        pull_number: int,
        *,
        body: str,
        commit_id: str,
        path: str,
        line: int,
    ) -> dict[str, Any]:
        payload = {
            "body": body,
            "commit_id": commit_id,
            "path": path,
            "side": "RIGHT",
            "line": line,
        }
        data = self._json("POST", f"/repos/{repository}/pulls/{pull_number}/comments", payload=payload)
        return data if isinstance(data, dict) else {}


__all__ = ["GitHubClient"]
