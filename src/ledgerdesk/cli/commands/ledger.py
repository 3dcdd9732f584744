"""Ledger inspection commands."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.balance import (
    compute_signed_balance,
    replay_balance,
    verify_chain,
)
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.payment import PaymentService


@click.group()
def ledger_group():
    """Inspect an account's transaction ledger."""
    pass


@ledger_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_ledger(ctx, account: str) -> None:
    """List an account's transactions in recorded order."""
    db = ctx.obj["db"]
    acc = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        transactions = PaymentService(db).get_transactions(acc.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nLedger for {acc.code} {acc.display_name}:")
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(
            f"ID: {txn.id:5d} | {txn.date.isoformat()} | {txn.type.value:15s} | "
            f"debit {txn.debit:>11,.2f} | credit {txn.credit:>11,.2f} | "
            f"balance {txn.balance_after:>+12,.2f}"
        )


@ledger_group.command("verify")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def verify_ledger(ctx, account: str) -> None:
    """Check the running balance chain and the stored account balance."""
    db = ctx.obj["db"]
    acc = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        transactions = PaymentService(db).get_transactions(acc.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    broken = verify_chain(transactions)
    replayed = replay_balance(transactions)
    stored = compute_signed_balance(acc)

    ok = True
    if broken:
        ok = False
        click.echo(f"Running balance broken at transaction(s): {', '.join(map(str, broken))}", err=True)
    if replayed != stored:
        ok = False
        click.echo(f"Stored balance {stored:+,.2f} differs from ledger {replayed:+,.2f}", err=True)

    if not ok:
        ctx.exit(1)
    click.echo(f"Ledger OK: {len(transactions)} transactions, balance {stored:+,.2f}")


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(ledger_group, name="ledger")
