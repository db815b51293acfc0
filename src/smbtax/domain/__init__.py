"""Domain layer for smbtax application."""

from smbtax.domain.entities import (
    Direction,
    Regime,
    RegimeConfig,
    RegimeTag,
    TaxResult,
    Transaction,
)

__all__ = [
    "Direction",
    "Regime",
    "RegimeConfig",
    "RegimeTag",
    "TaxResult",
    "Transaction",
]
