"""Tests for account service and account-changed events."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from ledgerdesk.domain.entities import AccountKind, BalanceSign
from ledgerdesk.domain.errors import (
    InvalidAmountError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ledgerdesk.domain.events import AccountChanged, EventBus
from ledgerdesk.utils.account_resolver import resolve_account


def test_create_client_without_opening_balance(account_service, temp_db):
    account_id = account_service.create_account(kind=AccountKind.CLIENT, last_name="Benali")

    account = account_service.get_account(account_id)
    assert account.balance_magnitude == Decimal("0")
    assert account.balance_sign == BalanceSign.CREDIT
    assert temp_db.get_transactions_for_account(account_id).data == []


def test_opening_balance_is_recorded_in_ledger(debtor_account, temp_db):
    assert debtor_account.balance_magnitude == Decimal("10000")
    assert debtor_account.balance_sign == BalanceSign.DEBIT
    transactions = temp_db.get_transactions_for_account(debtor_account.id).data
    assert len(transactions) == 1
    assert transactions[0].balance_after == Decimal("-10000")


def test_supplier_defaults_company_name(account_service):
    account_id = account_service.create_account(kind=AccountKind.SUPPLIER, last_name="Sarl Atlas")
    account = account_service.get_account(account_id)
    assert account.display_name == "Sarl Atlas"
    assert account.code == f"FR-000{account_id}"


@pytest.mark.parametrize("kind", [AccountKind.CLIENT, AccountKind.SUPPLIER])
def test_name_required(account_service, kind):
    with pytest.raises(ValidationError):
        account_service.create_account(kind=kind, last_name="  ")


def test_record_charge_increases_debt_and_notifies(account_service, event_bus, debtor_account):
    event_bus.received.clear()
    account_service.record_charge(debtor_account.id, Decimal("2500"), date(2026, 3, 1), reference="FA-0042")

    account = account_service.get_account(debtor_account.id)
    assert account.balance_magnitude == Decimal("12500")
    assert account.balance_sign == BalanceSign.DEBIT
    assert event_bus.received == [AccountChanged(account_id=debtor_account.id)]


def test_record_charge_rejects_non_positive(account_service, debtor_account):
    with pytest.raises(InvalidAmountError):
        account_service.record_charge(debtor_account.id, Decimal("0"), date(2026, 3, 1))


@pytest.mark.parametrize("amount", [Decimal("NaN"), Decimal("sNaN"), "abc", None])
def test_record_charge_rejects_non_numbers(account_service, temp_db, debtor_account, amount):
    with pytest.raises(ValidationError) as exc_info:
        account_service.record_charge(debtor_account.id, amount, date(2026, 3, 1))
    assert exc_info.value.field == "amount"
    assert len(temp_db.get_transactions_for_account(debtor_account.id).data) == 1


def test_failed_opening_balance_registers_nothing(account_service, temp_db, monkeypatch):
    def broken_entry(*args, **kwargs):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(temp_db, "_add_entry", broken_entry)

    with pytest.raises(PersistenceError) as exc_info:
        account_service.create_account(
            kind=AccountKind.CLIENT, last_name="Benali", opening_balance=Decimal("-500")
        )

    assert "disk full" in str(exc_info.value)
    assert account_service.list_accounts() == []

    # A retry once the store recovers registers exactly one account
    monkeypatch.undo()
    account_id = account_service.create_account(
        kind=AccountKind.CLIENT, last_name="Benali", opening_balance=Decimal("-500")
    )
    assert [acc.id for acc in account_service.list_accounts()] == [account_id]
    assert account_service.get_account(account_id).balance_sign == BalanceSign.DEBIT


def test_opening_balance_must_be_a_number(account_service):
    with pytest.raises(ValidationError) as exc_info:
        account_service.create_account(
            kind=AccountKind.CLIENT, last_name="Benali", opening_balance=Decimal("NaN")
        )
    assert exc_info.value.field == "opening_balance"
    assert account_service.list_accounts() == []


def test_record_charge_unknown_account(account_service):
    with pytest.raises(NotFoundError):
        account_service.record_charge(404, Decimal("10"), date(2026, 3, 1))


class TestResolveAccount:
    """Tests for resolving account references."""

    def test_by_id_code_and_name(self, account_service, debtor_account):
        assert resolve_account(account_service, debtor_account.id) == debtor_account.id
        assert resolve_account(account_service, str(debtor_account.id)) == debtor_account.id
        assert resolve_account(account_service, debtor_account.code) == debtor_account.id
        assert resolve_account(account_service, debtor_account.code.lower()) == debtor_account.id
        assert resolve_account(account_service, "benali karim") == debtor_account.id

    def test_supplier_code_does_not_resolve_client(self, account_service, debtor_account):
        with pytest.raises(NotFoundError):
            resolve_account(account_service, f"FR-000{debtor_account.id}")

    def test_ambiguous_name(self, account_service):
        account_service.create_account(kind=AccountKind.CLIENT, last_name="Benali")
        account_service.create_account(kind=AccountKind.CLIENT, last_name="Benali")
        with pytest.raises(NotFoundError) as exc_info:
            resolve_account(account_service, "Benali")
        assert "ambiguous" in str(exc_info.value)

    def test_unknown(self, account_service):
        with pytest.raises(NotFoundError):
            resolve_account(account_service, "Nobody")


class TestEventBus:
    """Tests for the account-changed channel."""

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(received.append)
        bus.publish(AccountChanged(1))
        unsubscribe()
        bus.publish(AccountChanged(2))
        assert received == [AccountChanged(1)]

    def test_failing_subscriber_does_not_stop_others(self, caplog):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(broken)
        bus.subscribe(received.append)
        with caplog.at_level("ERROR", logger="ledgerdesk.domain.events"):
            bus.publish(AccountChanged(3))

        assert received == [AccountChanged(3)]
        assert "failed handling" in caplog.text
