"""Reconciliation of an imported batch with the existing ledger."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence

from smbtax.domain.entities import Direction, Transaction

logger = logging.getLogger(__name__)

# Length of the note prefix that takes part in the duplicate key
NOTE_KEY_LENGTH = 50


class ImportStrategy(str, Enum):
    """How a new batch combines with a non-empty ledger."""

    REPLACE = "replace"
    MERGE = "merge"


@dataclass(frozen=True)
class ImportPreview:
    """What an import would bring in, shown before the caller commits."""

    new_count: int
    income_count: int
    expense_count: int
    income_total: Decimal
    expense_total: Decimal
    existing_count: int

    @property
    def requires_decision(self) -> bool:
        """True when the caller has to choose between replace and merge."""
        return self.existing_count > 0


@dataclass(frozen=True)
class ReconcileResult:
    """Result of reconciling a batch.

    ``ledger`` is None when nothing was committed because the caller still has
    to choose a strategy.
    """

    preview: ImportPreview
    ledger: Optional[list[Transaction]] = None
    strategy: Optional[ImportStrategy] = None
    added: int = 0
    skipped: int = 0

    @property
    def committed(self) -> bool:
        return self.ledger is not None


def sort_ledger(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Return transactions sorted by date, most recent first.

    The sort is stable, so same-day rows keep their relative order.
    """
    return sorted(transactions, key=lambda txn: txn.date, reverse=True)


def duplicate_key(txn: Transaction) -> tuple[date, Decimal, str]:
    """Composite key under which two transactions count as the same payment."""
    return (txn.date, txn.amount, (txn.note or "")[:NOTE_KEY_LENGTH])


def preview_import(existing: Sequence[Transaction], batch: Sequence[Transaction]) -> ImportPreview:
    """Summarize a batch against the ledger it would be imported into."""
    income = [txn for txn in batch if txn.direction == Direction.INCOME]
    expense = [txn for txn in batch if txn.direction == Direction.EXPENSE]
    return ImportPreview(
        new_count=len(batch),
        income_count=len(income),
        expense_count=len(expense),
        income_total=sum((txn.amount for txn in income), Decimal("0")),
        expense_total=sum((txn.amount for txn in expense), Decimal("0")),
        existing_count=len(existing),
    )


def replace_ledger(batch: Sequence[Transaction]) -> list[Transaction]:
    """Discard the existing ledger in favour of the batch."""
    return sort_ledger(batch)


def merge_ledger(
    existing: Sequence[Transaction], batch: Sequence[Transaction]
) -> tuple[list[Transaction], int]:
    """Prepend the batch rows that are not already in the ledger.

    Duplicates are only looked up in the existing ledger, so two identical
    payments inside one statement are both kept.

    Returns:
        Tuple of (merged ledger, number of skipped duplicates)
    """
    known = {duplicate_key(txn) for txn in existing}
    fresh = [txn for txn in batch if duplicate_key(txn) not in known]
    return sort_ledger([*fresh, *existing]), len(batch) - len(fresh)


def reconcile(
    existing: Sequence[Transaction],
    batch: Sequence[Transaction],
    strategy: Optional[ImportStrategy] = None,
) -> ReconcileResult:
    """Combine a freshly extracted batch with the existing ledger.

    Args:
        existing: Current ledger
        batch: Newly extracted transactions
        strategy: Replace or merge; required when the ledger is not empty

    Returns:
        ReconcileResult. When the ledger is non-empty and no strategy was
        given, nothing is committed and only the preview is returned.
    """
    preview = preview_import(existing, batch)

    if strategy is None:
        if preview.requires_decision:
            logger.info(
                "Import of %d transactions into a ledger of %d awaits a strategy",
                preview.new_count,
                preview.existing_count,
            )
            return ReconcileResult(preview=preview)
        strategy = ImportStrategy.REPLACE

    if strategy == ImportStrategy.REPLACE:
        ledger = replace_ledger(batch)
        added, skipped = len(batch), 0
    elif strategy == ImportStrategy.MERGE:
        ledger, skipped = merge_ledger(existing, batch)
        added = len(batch) - skipped
    else:
        raise ValueError(f"Unknown import strategy: {strategy!r}")

    logger.info("%s import: %d added, %d duplicates skipped", strategy.value, added, skipped)
    return ReconcileResult(
        preview=preview,
        ledger=ledger,
        strategy=strategy,
        added=added,
        skipped=skipped,
    )
