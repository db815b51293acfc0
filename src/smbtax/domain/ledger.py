"""Ledger domain service."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from smbtax.database.base import Database
from smbtax.domain.calendar import Obligation, project_obligations
from smbtax.domain.entities import Direction, RegimeTag, TaxResult, Transaction
from smbtax.domain.errors import (
    NotFoundError,
    ValidationError,
    no_transactions_found,
    transaction_not_found,
)
from smbtax.domain.extractor import (
    ExtractionResult,
    extract_transactions,
    matches_fixed_fee_account,
    suggest_category,
)
from smbtax.domain.reconciliation import ImportStrategy, ReconcileResult, reconcile
from smbtax.domain.tax import calculate
from smbtax.utils.amount_parser import CENTS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportReport:
    """Extraction and reconciliation outcome of one statement import."""

    extraction: ExtractionResult
    reconciliation: ReconcileResult

    @property
    def committed(self) -> bool:
        return self.reconciliation.committed


class LedgerService:
    """Service for managing the ledger and computing taxes over it."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require(self, transaction_id: str) -> Transaction:
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def add_transaction(
        self,
        date: date,
        amount: Decimal,
        direction: Direction,
        category: Optional[str] = None,
        note: str = "",
        account_number: Optional[str] = None,
        fixed_fee: Optional[bool] = None,
    ) -> Transaction:
        """Add a manually entered transaction.

        Args:
            date: Transaction date
            amount: Positive amount
            direction: Income or expense
            category: Category label; suggested from the note when omitted
            note: Payment purpose
            account_number: Account the money moved through
            fixed_fee: Tag for the fixed-fee regime; when None, income through
                the profile's fixed-fee account is tagged automatically

        Returns:
            The stored transaction

        Raises:
            ValidationError: If the amount is not positive
        """
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
        if amount <= 0:
            raise ValidationError(f"Amount must be positive, got {amount}")

        if fixed_fee is None:
            profile = self.db.get_profile()
            fixed_fee = (
                direction == Direction.INCOME
                and profile.has_fixed_fee_addon
                and matches_fixed_fee_account(account_number, profile.fixed_fee_account)
            )

        txn = Transaction(
            date=date,
            amount=amount,
            direction=direction,
            category=category or suggest_category(note),
            note=note,
            account_number=account_number,
            regime_tag=RegimeTag.FIXED_FEE if fixed_fee else None,
        )
        self.db.add_transaction(txn)
        return txn

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: str,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        direction: Optional[Direction] = None,
        category: Optional[str] = None,
        note: Optional[str] = None,
        account_number: Optional[str] = None,
    ) -> Transaction:
        """Update only the fields that are provided.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the new amount is not positive
        """
        txn = self._require(transaction_id)
        if amount is not None:
            amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
        if amount is not None and amount <= 0:
            raise ValidationError(f"Amount must be positive, got {amount}")

        changes = {
            "date": date,
            "amount": amount,
            "direction": direction,
            "category": category,
            "note": note,
            "account_number": account_number,
        }
        updated = replace(txn, **{k: v for k, v in changes.items() if v is not None})
        self.db.update_transaction(updated)
        return updated

    def toggle_fixed_fee(self, transaction_id: str) -> Transaction:
        """Flip the fixed-fee regime tag of a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self._require(transaction_id)
        tag = None if txn.is_fixed_fee else RegimeTag.FIXED_FEE
        updated = replace(txn, regime_tag=tag)
        self.db.update_transaction(updated)
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        self._require(transaction_id)
        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions in an inclusive date range, most recent first."""
        return self.db.list_transactions(start_date=start_date, end_date=end_date)

    def get_ledger(self) -> list[Transaction]:
        """Return the whole ledger, most recent first."""
        return self.db.read_ledger()

    def import_statement(self, text: str, strategy: Optional[ImportStrategy] = None) -> ImportReport:
        """Import a decoded bank statement into the ledger.

        The business INN and fixed-fee account come from the stored profile.
        Nothing is written when the ledger is not empty and no strategy is
        given; the report then carries the preview for the caller to decide.

        Args:
            text: Decoded statement text
            strategy: Replace or merge

        Returns:
            ImportReport

        Raises:
            UnrecognizedFormatError: If the text is not a bank statement
            ValidationError: If the statement holds no valid transaction
        """
        profile = self.db.get_profile()
        fixed_fee_account = profile.fixed_fee_account if profile.has_fixed_fee_addon else None

        extraction = extract_transactions(
            text, own_inn=profile.inn, fixed_fee_account=fixed_fee_account
        )
        if not extraction.transactions:
            raise ValidationError(no_transactions_found(extraction.documents))

        existing = self.db.read_ledger()
        result = reconcile(existing, extraction.transactions, strategy=strategy)

        if result.committed:
            self.db.write_ledger(result.ledger)
            logger.info("Ledger now holds %d transactions", len(result.ledger))

        return ImportReport(extraction=extraction, reconciliation=result)

    def get_tax_result(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        contributions: Optional[Decimal] = None,
    ) -> TaxResult:
        """Compute taxes for the ledger, optionally over a date range.

        Raises:
            RegimeConfigurationError: If the stored profile is invalid
        """
        ledger = self.list_transactions(start_date=start_date, end_date=end_date)
        return calculate(ledger, self.db.get_profile(), contributions=contributions)

    def get_calendar(self, today: Optional[date] = None) -> list[Obligation]:
        """Project the tax calendar of the current year."""
        return project_obligations(self.db.read_ledger(), self.db.get_profile(), today=today)
