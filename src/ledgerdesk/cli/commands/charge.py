"""Charge command: book an invoice total against an account."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.commands.account import format_balance
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.utils.amount_parser import parse_amount
from ledgerdesk.utils.date_parser import parse_date


@click.command("charge")
@click.option("--account", required=True, help="Account ID, code or name")
@click.option("--date", default="today", show_default=True, help="Charge date")
@click.option("--amount", required=True, help="Invoice total (e.g., 1500.00)")
@click.option("--note", help="Note")
@click.option("--reference", help="Invoice number")
@click.pass_context
def charge_account(
    ctx,
    account: str,
    date: str,
    amount: str,
    note: str | None,
    reference: str | None,
):
    """Charge an invoice total to an account.

    Examples:
        ledgerdesk charge --account 1 --amount 2500 --reference FA-0042
    """
    db = ctx.obj["db"]
    service = AccountService(db, ctx.obj["events"])
    acc = resolve_account_or_exit(ctx, service, account)

    try:
        charge_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        charge_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.record_charge(
            account_id=acc.id,
            amount=charge_amount,
            date=charge_date,
            note=note,
            reference=reference,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    updated = service.require_account(acc.id)
    click.echo(f"Recorded charge {transaction_id} of {charge_amount:,.2f} for {updated.display_name}")
    click.echo(f"  Balance: {format_balance(updated.balance_magnitude, updated.balance_sign)}")


def register_commands(cli):
    """Register charge command with main CLI."""
    cli.add_command(charge_account)
