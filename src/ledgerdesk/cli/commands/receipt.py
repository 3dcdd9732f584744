"""Receipt reprint command."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.entities import SnapshotSource
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.payment import PaymentService
from ledgerdesk.domain.receipt import build_receipt, render_receipt_lines


@click.command("receipt")
@click.argument("account", metavar="ACCOUNT")
@click.argument("transaction_id", metavar="TRANSACTION_ID", type=int)
@click.pass_context
def print_receipt(ctx, account: str, transaction_id: int):
    """Reprint the receipt of a past payment.

    Examples:
        ledgerdesk receipt 1 12
    """
    db = ctx.obj["db"]
    language = ctx.obj["language"]
    acc = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        historical = PaymentService(db, language=language).historical_payment(acc, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if historical.snapshot.source == SnapshotSource.CACHED:
        click.echo("Note: balances estimated from the current account balance.", err=True)

    for line in render_receipt_lines(build_receipt(acc, historical, language=language)):
        click.echo(line)


def register_commands(cli):
    """Register receipt command with main CLI."""
    cli.add_command(print_receipt)
