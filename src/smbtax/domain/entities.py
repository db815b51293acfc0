"""Domain model entities for smbtax.

These are pure data classes representing business concepts, independent of
database schema and of the statement format they were read from.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from smbtax.domain.errors import RegimeConfigurationError, ValidationError


class Direction(str, Enum):
    """Money flow direction relative to the business."""

    INCOME = "income"
    EXPENSE = "expense"


class Regime(str, Enum):
    """Primary tax regime of the business."""

    FLAT_REVENUE = "flat_revenue"
    REVENUE_MINUS_EXPENSE = "revenue_minus_expense"
    NONE = "none"


class RegimeTag(str, Enum):
    """Per-transaction override of the primary regime."""

    FIXED_FEE = "fixed_fee"


def new_transaction_id() -> str:
    """Mint an opaque transaction identifier."""
    return uuid4().hex


@dataclass(frozen=True)
class Transaction:
    """Ledger entry domain entity.

    The amount is always non-negative; the sign lives in ``direction``.
    """

    date: date
    amount: Decimal
    direction: Direction
    category: str
    note: str = ""
    account_number: Optional[str] = None
    regime_tag: Optional[RegimeTag] = None
    id: str = field(default_factory=new_transaction_id)

    def __post_init__(self):
        if self.amount < 0:
            raise ValidationError(f"Transaction amount must be non-negative, got {self.amount}")

    @property
    def is_fixed_fee(self) -> bool:
        return self.regime_tag == RegimeTag.FIXED_FEE


@dataclass(frozen=True)
class RegimeConfig:
    """Active tax configuration of the business profile.

    The primary regime and the fixed-fee add-on are independent: the add-on
    covers only income tagged with ``RegimeTag.FIXED_FEE``.
    """

    regime: Regime = Regime.FLAT_REVENUE
    has_fixed_fee_addon: bool = False
    has_employees: bool = False
    fixed_fee_account: Optional[str] = None
    inn: Optional[str] = None

    def validate(self) -> "RegimeConfig":
        """Return self, or raise RegimeConfigurationError if misconfigured."""
        if not isinstance(self.regime, Regime):
            raise RegimeConfigurationError(f"Unknown tax regime: {self.regime!r}")
        if self.fixed_fee_account and not self.has_fixed_fee_addon:
            raise RegimeConfigurationError(
                "A fixed-fee account fragment requires the fixed-fee add-on"
            )
        return self


@dataclass(frozen=True)
class TaxBase:
    """Unrounded tax base of a ledger under one regime."""

    income: Decimal
    expense: Decimal
    taxable_income: Decimal
    taxable_expense: Decimal
    gross_tax: Decimal


@dataclass(frozen=True)
class NetTax:
    """Gross tax reduced by deductible mandatory contributions."""

    gross_tax: Decimal
    fixed_contributions: Decimal
    variable_contributions: Decimal
    total_contributions: Decimal
    deduction_limit: Decimal
    total_deductible: Decimal
    net_tax: Decimal


@dataclass(frozen=True)
class TaxResult:
    """Reported tax figures for a ledger, rounded to whole currency units."""

    income: Decimal
    expense: Decimal
    taxable_income: Decimal
    gross_tax: Decimal
    total_deductible: Decimal
    net_tax: Decimal
    profit: Decimal
    load_ratio: Decimal
