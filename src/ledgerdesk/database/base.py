"""Abstract ledger interface.

The balance core talks to the transaction store only through this interface.
Calls report their outcome in a ``LedgerResponse`` instead of raising, so the
core decides which failures are fatal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerdesk.domain.entities import (
    Account,
    AccountKind,
    PaymentMethod,
)


@dataclass(frozen=True)
class LedgerResponse:
    """Outcome of a ledger call."""

    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "LedgerResponse":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, error: str) -> "LedgerResponse":
        return cls(success=False, error=error)


class Ledger(ABC):
    """Append-only transaction store for client and supplier accounts."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        kind: AccountKind,
        last_name: str,
        first_name: Optional[str] = None,
        company_name: Optional[str] = None,
        opening_balance: Optional[Decimal] = None,
        opening_date: Optional[date] = None,
    ) -> LedgerResponse:
        """Register an account, with an opening balance entry if one is given.

        The account and its opening entry are stored together or not at all.
        Data on success: the account ID.
        """
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, kind: Optional[AccountKind] = None) -> list[Account]:
        """List accounts, optionally filtered by kind."""
        pass

    # Transaction operations
    @abstractmethod
    def create_payment(
        self,
        account_id: int,
        amount: Decimal,
        date: date,
        method: PaymentMethod,
        note: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> LedgerResponse:
        """Append a payment. Data on success: PaymentRecord with id and balance_after."""
        pass

    @abstractmethod
    def record_charge(
        self,
        account_id: int,
        amount: Decimal,
        date: date,
        note: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> LedgerResponse:
        """Append an invoice charge. Data on success: the new transaction ID."""
        pass

    @abstractmethod
    def get_transactions_for_account(self, account_id: int) -> LedgerResponse:
        """Get an account's transactions in persisted order. Data: list[Transaction]."""
        pass
