"""Abstract ledger repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from smbtax.domain.entities import RegimeConfig, Transaction


class Database(ABC):
    """Abstract repository for one business's ledger and profile."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Ledger operations
    @abstractmethod
    def read_ledger(self) -> list[Transaction]:
        """Return the whole ledger, most recent first."""
        pass

    @abstractmethod
    def write_ledger(self, transactions: Sequence[Transaction]) -> None:
        """Replace the stored ledger, keeping the given order."""
        pass

    # Transaction operations
    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> str:
        """Store a new transaction ahead of same-day rows. Returns its ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction: Transaction) -> None:
        """Overwrite the stored transaction with the same ID."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions in an inclusive date range, most recent first."""
        pass

    # Profile operations
    @abstractmethod
    def get_profile(self) -> RegimeConfig:
        """Get the regime configuration, or the default one if none is stored."""
        pass

    @abstractmethod
    def save_profile(self, config: RegimeConfig) -> None:
        """Store the regime configuration."""
        pass
