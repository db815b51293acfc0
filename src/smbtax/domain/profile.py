"""Business profile domain service."""

import re
from dataclasses import replace
from typing import Optional

from smbtax.database.base import Database
from smbtax.domain.entities import Regime, RegimeConfig
from smbtax.domain.errors import ValidationError
from smbtax.domain.tax import coerce_regime

# Organisations have 10-digit INNs, individual entrepreneurs 12-digit ones
INN_PATTERN = re.compile(r"^(\d{10}|\d{12})$")


def validate_inn(inn: str) -> str:
    """Return the stripped INN, or raise ValidationError."""
    inn = inn.strip()
    if not INN_PATTERN.match(inn):
        raise ValidationError(f"INN must have 10 or 12 digits, got '{inn}'")
    return inn


class ProfileService:
    """Service for reading and updating the regime configuration."""

    def __init__(self, db: Database):
        """Initialize profile service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_profile(self) -> RegimeConfig:
        """Return the stored regime configuration."""
        return self.db.get_profile()

    def update_profile(
        self,
        regime: Optional[Regime] = None,
        has_fixed_fee_addon: Optional[bool] = None,
        has_employees: Optional[bool] = None,
        fixed_fee_account: Optional[str] = None,
        inn: Optional[str] = None,
    ) -> RegimeConfig:
        """Update only the provided profile fields.

        Pass an empty string for ``fixed_fee_account`` or ``inn`` to clear it.
        Turning the fixed-fee add-on off also clears the fixed-fee account.

        Returns:
            The stored configuration

        Raises:
            ValidationError: If the INN is malformed
            RegimeConfigurationError: If the resulting configuration is invalid
        """
        config = self.db.get_profile()
        changes = {}

        if regime is not None:
            changes["regime"] = coerce_regime(regime)
        if has_fixed_fee_addon is not None:
            changes["has_fixed_fee_addon"] = has_fixed_fee_addon
            if not has_fixed_fee_addon and fixed_fee_account is None:
                changes["fixed_fee_account"] = None
        if has_employees is not None:
            changes["has_employees"] = has_employees
        if fixed_fee_account is not None:
            changes["fixed_fee_account"] = fixed_fee_account.strip() or None
        if inn is not None:
            changes["inn"] = validate_inn(inn) if inn.strip() else None

        updated = replace(config, **changes).validate()
        self.db.save_profile(updated)
        return updated
