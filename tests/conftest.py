"""Shared pytest fixtures for ledgerdesk tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal
import pytest

from ledgerdesk.database.factories import create_sqlite_database
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.entities import (
    Account,
    AccountKind,
    BalanceSign,
    PaymentMethod,
    Transaction,
    TransactionType,
)
from ledgerdesk.domain.events import EventBus
from ledgerdesk.domain.payment import PaymentService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def event_bus():
    """Create an EventBus that remembers what was published."""
    bus = EventBus()
    bus.received = []
    bus.subscribe(bus.received.append)
    return bus


@pytest.fixture
def account_service(temp_db, event_bus):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db, event_bus)


@pytest.fixture
def payment_service(temp_db, event_bus):
    """Create a PaymentService with a temporary database."""
    return PaymentService(temp_db, event_bus, language="fr")


@pytest.fixture
def debtor_account(account_service):
    """Client owing 10000, recorded through an opening balance."""
    account_id = account_service.create_account(
        kind=AccountKind.CLIENT,
        last_name="Benali",
        first_name="Karim",
        opening_balance=Decimal("-10000"),
        opening_date=date(2026, 2, 1),
    )
    return account_service.get_account(account_id)


@pytest.fixture
def supplier_account(account_service):
    """Supplier with a zero balance."""
    account_id = account_service.create_account(
        kind=AccountKind.SUPPLIER, last_name="Sarl Atlas", company_name="Sarl Atlas"
    )
    return account_service.get_account(account_id)


def make_account(
    magnitude: str = "0",
    sign: BalanceSign = BalanceSign.CREDIT,
    account_id: int = 1,
    kind: AccountKind = AccountKind.CLIENT,
) -> Account:
    """Build an Account entity without touching the database."""
    return Account(
        id=account_id,
        kind=kind,
        last_name="Haddad",
        first_name="Nadia",
        company_name=None,
        balance_magnitude=Decimal(magnitude),
        balance_sign=sign,
        total_paid=Decimal("0"),
        created_at=datetime.now(UTC),
    )


def make_transaction(
    txn_id: int,
    txn_type: TransactionType,
    amount: str,
    on: date,
    balance_after: str,
    method: PaymentMethod | None = None,
    note: str | None = None,
) -> Transaction:
    """Build a Transaction entity without touching the database."""
    if txn_type == TransactionType.PAYMENT and method is None:
        method = PaymentMethod.CASH
    return Transaction(
        id=txn_id,
        account_id=1,
        type=txn_type,
        amount=Decimal(amount),
        date=on,
        method=method,
        note=note,
        reference=None,
        balance_after=Decimal(balance_after),
        created_at=datetime.now(UTC),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
