# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""License gate: the decision that runs before any scan work."""

from __future__ import annotations

import logging
from typing import Protocol

from ..errors import GateFailure, LeakGuardError
from ..models.context import RunContext
from ..models.gate import ActorClassification, GateDecision, GateReason

logger = logging.getLogger(__name__)

MISSING_LICENSE_MESSAGE = (
    "🛑 missing gitleaks license. Go grab one at gitleaks.io and store it as a GitHub Secret "
    "named GITLEAKS_LICENSE. For more info about the recent breaking update, see "
    "[here](https://github.com/gitleaks/gitleaks-action#-announcement)."
)


class LicenseValidator(Protocol):
    def validate(self, license_key: str, ctx: RunContext) -> None:
        """Return on success; raise LicenseValidationError when the key is not usable."""
        ...


class LicenseGate:
    def __init__(self, validator: LicenseValidator | None = None):
        self.validator = validator

    @staticmethod
    def decide(classification: ActorClassification, license_credential: str | None) -> GateDecision:
        """Individuals are exempt; everyone else needs a non-empty credential."""
        if classification == ActorClassification.INDIVIDUAL:
            return GateDecision(may_proceed=True, reason=GateReason.INDIVIDUAL_EXEMPT)
        if license_credential and license_credential.strip():
            return GateDecision(may_proceed=True, reason=GateReason.LICENSE_PRESENT)
        return GateDecision(may_proceed=False, reason=GateReason.LICENSE_MISSING)

    def check(self, classification: ActorClassification, ctx: RunContext) -> GateDecision:
        """Decide without contacting the licensing service; raises GateFailure if refused."""
        decision = self.decide(classification, ctx.license_credential)
        if not decision.may_proceed:
            raise GateFailure(MISSING_LICENSE_MESSAGE, decision)
        return decision

    def validate(self, decision: GateDecision, ctx: RunContext) -> None:
        """
        Validate the credential when the decision requires it.

        Validation may activate the repository on the license, so it runs only once the
        event is known to be scannable. It fails closed: any error from the validator,
        including transport errors and malformed responses, refuses the run.
        """
        if not decision.requires_validation:
            return
        refused = GateDecision(may_proceed=False, reason=GateReason.LICENSE_INVALID)
        if self.validator is None:
            raise GateFailure("🛑 license validation is not configured; refusing to scan", refused)
        try:
            self.validator.validate(ctx.license_credential or "", ctx)
        except LeakGuardError as exc:
            raise GateFailure(f"🛑 gitleaks license validation failed: {exc}", refused) from exc
        except Exception as exc:  # noqa: BLE001
            logger.debug("License validation error", exc_info=True)
            raise GateFailure(f"🛑 gitleaks license validation failed unexpectedly: {exc}", refused) from exc
        logger.info("Gitleaks license is valid.")

    def enforce(self, classification: ActorClassification, ctx: RunContext) -> GateDecision:
        """`check` followed by `validate`."""
        decision = self.check(classification, ctx)
        self.validate(decision, ctx)
        return decision


__all__ = ["LicenseGate", "LicenseValidator", "MISSING_LICENSE_MESSAGE"]
