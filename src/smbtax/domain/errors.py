"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class UnrecognizedFormatError(DomainError):
    """Input text is not a bank statement exchange file at all."""


class RegimeConfigurationError(DomainError):
    """Tax regime configuration cannot be used for computation."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def unrecognized_statement() -> str:
    """Return message for text that is not a 1C exchange statement."""
    return "Unrecognized statement format: expected a 1CClientBankExchange file"


def strategy_required(existing_count: int) -> str:
    """Return message when an import into a non-empty ledger needs a strategy."""
    return (
        f"The ledger already holds {existing_count} "
        f"transaction{'s' if existing_count != 1 else ''}. "
        "Choose the replace or merge strategy."
    )


def no_transactions_found(documents: int) -> str:
    """Return message for a statement without any importable transaction."""
    if documents == 0:
        return "No transactions found in the statement"
    return f"No valid transactions found among {documents} statement documents"
