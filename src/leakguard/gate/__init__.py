# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Actor classification and license gating."""

from .classifier import ActorClassifier
from .keygen import KeygenLicenseValidator
from .license import LicenseGate, LicenseValidator

__all__ = ["ActorClassifier", "KeygenLicenseValidator", "LicenseGate", "LicenseValidator"]
