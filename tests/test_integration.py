"""Integration tests for end-to-end workflows."""

import re
from datetime import date, datetime
from decimal import Decimal

from ledgerdesk.cli.main import cli
from ledgerdesk.domain.balance import compute_signed_balance, replay_balance
from ledgerdesk.domain.entities import (
    AccountKind,
    BalanceSign,
    PaymentMethod,
    PaymentRequest,
    SnapshotSource,
)
from ledgerdesk.domain.events import AccountChanged
from ledgerdesk.domain.receipt import build_receipt


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: account → charge → pay → history → receipt → verify."""
    # Step 1: Create a client with an opening debt
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "account",
            "create",
            "Haddad",
            "--first-name",
            "Nadia",
            "--balance=-3000",
        ],
    )
    assert result.exit_code == 0
    match = re.search(r"ID: (\d+), code: (CL-\d+)", result.output)
    assert match is not None
    account_id, code = match.groups()

    # Step 2: Charge an invoice
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "charge",
            "--account",
            code,
            "--amount",
            "1500",
            "--date",
            "2026-04-01",
            "--reference",
            "FA-0100",
        ],
    )
    assert result.exit_code == 0
    assert "4,500.00 (owes)" in result.output

    # Step 3: Pay part of it
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "pay",
            "--account",
            "Haddad Nadia",
            "--amount",
            "2 000",
            "--date",
            "2026-04-03",
            "--method",
            "cheque",
            "--reference",
            "5512",
        ],
    )
    assert result.exit_code == 0
    assert "New balance:      2,500.00 (owes)" in result.output
    payment_id = re.search(r"Recorded payment (\d+)", result.output).group(1)

    # Step 4: Payment history
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "payments", account_id, "--search", "cheque"]
    )
    assert result.exit_code == 0
    assert "Total: 2,000.00 (1 payments)" in result.output

    # Step 5: Reprint the receipt
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--language", "en", "receipt", code, payment_id]
    )
    assert result.exit_code == 0
    assert "Friday, 03/04/2026" in result.output
    assert "4500.00" in result.output
    assert "2500.00 (debit)" in result.output

    # Step 6: The stored balance agrees with the ledger
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "ledger", "verify", code])
    assert result.exit_code == 0
    assert "balance -2,500.00" in result.output


def test_service_workflow_payment_to_reprint(account_service, payment_service, event_bus):
    """A fresh receipt and its later reprint carry the same figures."""
    account_id = account_service.create_account(
        kind=AccountKind.SUPPLIER,
        last_name="Mansouri",
        company_name="Sarl Atlas",
        opening_balance=Decimal("-800"),
        opening_date=date(2026, 5, 1),
    )
    account = account_service.get_account(account_id)
    event_bus.received.clear()

    result = payment_service.submit_payment(
        account,
        PaymentRequest(
            amount=Decimal("1000"),
            date=date(2026, 5, 4),
            method=PaymentMethod.TRANSFER,
            reference="VIR-77",
        ),
    )

    assert result.new_balance == Decimal("200")
    assert result.new_balance_sign == BalanceSign.CREDIT
    assert event_bus.received == [AccountChanged(account_id=account_id)]
    assert payment_service.confirm_against_ledger(result)

    refreshed = account_service.get_account(account_id)
    transactions = payment_service.get_transactions(account_id)
    assert replay_balance(transactions) == compute_signed_balance(refreshed)

    historical = payment_service.historical_payment(refreshed, result.transaction_id)
    assert historical.snapshot.source == SnapshotSource.LEDGER

    printed_at = datetime(2026, 5, 4, 10, 0)
    fresh = build_receipt(account, result, language="fr", printed_at=printed_at)
    reprint = build_receipt(refreshed, historical, language="fr", printed_at=printed_at)
    assert fresh == reprint
    assert fresh.account_code == f"FR-000{account_id}"
    assert fresh.account_name == "SARL ATLAS"
