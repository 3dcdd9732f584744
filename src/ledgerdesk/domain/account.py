"""Account domain service."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from ledgerdesk.database.base import Ledger
from ledgerdesk.domain.balance import require_positive_amount
from ledgerdesk.domain.entities import Account as AccountEntity, AccountKind
from ledgerdesk.domain.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    account_not_found,
)
from ledgerdesk.domain.events import AccountChanged, EventBus

logger = logging.getLogger(__name__)


class AccountService:
    """Service for registering client and supplier accounts and charging them."""

    def __init__(self, ledger: Ledger, events: Optional[EventBus] = None):
        """Initialize account service.

        Args:
            ledger: Ledger instance
            events: Event bus receiving AccountChanged notifications
        """
        self.ledger = ledger
        self.events = events if events is not None else EventBus()

    def create_account(
        self,
        kind: AccountKind,
        last_name: str,
        first_name: Optional[str] = None,
        company_name: Optional[str] = None,
        opening_balance: Optional[Decimal] = None,
        opening_date: Optional[date] = None,
    ) -> int:
        """Register a new account.

        Args:
            kind: Client or supplier
            last_name: Last name (clients) or contact name
            first_name: Optional first name
            company_name: Company name, required for suppliers
            opening_balance: Optional signed opening balance (negative = owes money)
            opening_date: Date of the opening balance entry, defaults to today

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is missing
            PersistenceError: If the ledger could not store the account; nothing
                is registered in that case
        """
        kind = AccountKind(kind)
        last_name = (last_name or "").strip()
        if kind == AccountKind.SUPPLIER:
            company_name = (company_name or last_name).strip()
            if not company_name:
                raise ValidationError("company_name", "Supplier company name is required")
        elif not last_name:
            raise ValidationError("last_name", "Client name is required")

        if opening_balance is not None:
            try:
                opening_balance = Decimal(opening_balance)
            except (InvalidOperation, TypeError, ValueError):
                opening_balance = Decimal("NaN")
            if not opening_balance.is_finite():
                raise ValidationError("opening_balance", "Opening balance must be a number")
            if opening_balance == 0:
                opening_balance = None

        response = self.ledger.create_account(
            kind=kind,
            last_name=last_name,
            first_name=first_name,
            company_name=company_name,
            opening_balance=opening_balance,
            opening_date=(opening_date or date.today()) if opening_balance is not None else None,
        )
        if not response.success:
            raise PersistenceError(response.error or "Could not register account")
        account_id = response.data

        logger.info("Registered %s account %s", kind.value, account_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.ledger.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.ledger.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, kind: Optional[AccountKind] = None) -> list[AccountEntity]:
        """List accounts, optionally filtered by kind."""
        return self.ledger.list_accounts(kind)

    def record_charge(
        self,
        account_id: int,
        amount: Decimal,
        date: date,
        note: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> int:
        """Charge an invoice total to an account.

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If amount is missing or not a number
            InvalidAmountError: If amount is not finite, zero or negative
            PersistenceError: If the ledger could not store the charge
        """
        self.require_account(account_id)
        amount = require_positive_amount(amount)

        response = self.ledger.record_charge(
            account_id=account_id,
            amount=amount,
            date=date,
            note=note,
            reference=reference,
        )
        if not response.success:
            raise PersistenceError(response.error or "Could not record charge")

        self.events.publish(AccountChanged(account_id=account_id))
        return response.data
