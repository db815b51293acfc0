"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from smbtax.domain import entities as domain
from smbtax.database.models import (
    BusinessProfile as ORMBusinessProfile,
    Transaction as ORMTransaction,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        direction=domain.Direction(orm_transaction.direction),
        category=orm_transaction.category,
        note=orm_transaction.note or "",
        account_number=orm_transaction.account_number,
        regime_tag=domain.RegimeTag(orm_transaction.regime_tag) if orm_transaction.regime_tag else None,
    )


def transaction_to_orm(transaction: domain.Transaction, position: int = 0) -> ORMTransaction:
    """Convert domain Transaction entity to a new SQLAlchemy Transaction model."""
    return ORMTransaction(
        id=transaction.id,
        date=transaction.date,
        amount=transaction.amount,
        direction=transaction.direction.value,
        category=transaction.category,
        note=transaction.note or "",
        account_number=transaction.account_number,
        regime_tag=transaction.regime_tag.value if transaction.regime_tag else None,
        position=position,
    )


def profile_to_domain(orm_profile: ORMBusinessProfile) -> domain.RegimeConfig:
    """Convert SQLAlchemy BusinessProfile model to domain RegimeConfig."""
    return domain.RegimeConfig(
        regime=domain.Regime(orm_profile.regime),
        has_fixed_fee_addon=orm_profile.has_fixed_fee_addon,
        has_employees=orm_profile.has_employees,
        fixed_fee_account=orm_profile.fixed_fee_account,
        inn=orm_profile.inn,
    )
