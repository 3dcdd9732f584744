"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input, tagged with the offending field."""

    def __init__(self, field: Optional[str], message: str):
        super().__init__(message)
        self.field = field


class InvalidAmountError(ValidationError):
    """Payment amount is zero or negative."""

    def __init__(self, amount):
        super().__init__("amount", invalid_amount(amount))
        self.amount = amount


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class PersistenceError(DomainError):
    """The ledger refused or failed to store a transaction."""


class SubmissionInProgressError(DomainError):
    """A payment submission is already in flight."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int, account_id: int) -> str:
    """Return message for a transaction missing from an account's ledger."""
    return f"Transaction {transaction_id} not found for account {account_id}"


def invalid_amount(amount) -> str:
    """Return message for a non-positive payment amount."""
    return f"Amount must be greater than zero (got {amount})"


def ledger_write_failed(error: Optional[str]) -> str:
    """Return message when the ledger reports a failed write."""
    return f"Could not record payment: {error or 'unknown ledger error'}"
