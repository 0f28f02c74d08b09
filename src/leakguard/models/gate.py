# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Actor classification and license gate models."""

from dataclasses import dataclass
from enum import Enum


class ActorClassification(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    ORGANIZATION = "ORGANIZATION"
    UNKNOWN = "UNKNOWN"


class GateReason(str, Enum):
    INDIVIDUAL_EXEMPT = "INDIVIDUAL_EXEMPT"
    LICENSE_PRESENT = "LICENSE_PRESENT"
    LICENSE_MISSING = "LICENSE_MISSING"
    LICENSE_INVALID = "LICENSE_INVALID"


@dataclass(frozen=True)
class GateDecision:
    may_proceed: bool
    reason: GateReason

    @property
    def requires_validation(self) -> bool:
        return self.may_proceed and self.reason == GateReason.LICENSE_PRESENT
