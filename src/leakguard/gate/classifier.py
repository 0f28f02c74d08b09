# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Decide whether the repository owner is an individual or an organization."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from ..errors import categorize_exception, error_category_to_reason
from ..models.gate import ActorClassification

logger = logging.getLogger(__name__)


class UserLookup(Protocol):
    def get_user(self, username: str) -> dict[str, Any]: ...


class ActorClassifier:
    """
    Classifies the owner with a single ``GET /users/{login}``.

    Lookup failures never propagate: they degrade to ``UNKNOWN``, which the license
    gate treats like an organization.
    """

    def __init__(self, users: UserLookup):
        self.users = users

    def classify(self, owner_login: str) -> ActorClassification:
        try:
            user = self.users.get_user(owner_login)
        except Exception as exc:  # noqa: BLE001
            reason = error_category_to_reason(categorize_exception(exc))
            logger.warning(
                "Get user [%s] failed with error [%s] (%s). License key validation will be enforced.",
                owner_login,
                exc,
                reason,
            )
            return ActorClassification.UNKNOWN

        user_type = user.get("type")
        if user_type == "Organization":
            logger.info("[%s] is an organization. License key is required.", owner_login)
            return ActorClassification.ORGANIZATION
        if user_type == "User":
            logger.info("[%s] is an individual user. No license key is required.", owner_login)
            return ActorClassification.INDIVIDUAL

        logger.warning(
            "[%s] is an unexpected type [%s]. License key validation will be enforced.",
            owner_login,
            user_type,
        )
        logger.debug("GitHub GET user API returned [%s]", json.dumps(user, default=str))
        return ActorClassification.UNKNOWN


__all__ = ["ActorClassifier", "UserLookup"]
