"""Payment history command."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.date_filters import resolve_cli_date_range
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.payment import PaymentService


@click.command("payments")
@click.argument("account", metavar="ACCOUNT")
@click.option("--start-date", help="Only payments on or after this date")
@click.option("--end-date", help="Only payments on or before this date")
@click.option(
    "--period",
    type=click.Choice(["this-month", "last-month", "this-year", "last-year"]),
    help="Named period instead of explicit dates",
)
@click.option("--search", help="Match amount, note, reference or method")
@click.pass_context
def list_payments(
    ctx,
    account: str,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    search: str | None,
):
    """Show an account's payment history, newest first.

    Examples:
        ledgerdesk payments 1
        ledgerdesk payments CL-0001 --period this-month
        ledgerdesk payments "Benali Karim" --search cheque
    """
    db = ctx.obj["db"]
    acc = resolve_account_or_exit(ctx, AccountService(db), account)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)

    try:
        history = PaymentService(db, language=ctx.obj["language"]).payment_history(
            acc.id, start_date=start, end_date=end, search=search
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not history.payments:
        click.echo("No payments found.")
        return

    click.echo(f"\nPayments for {acc.code} {acc.display_name}:")
    click.echo("-" * 72)
    for txn in history.payments:
        method = txn.method.value if txn.method else "-"
        click.echo(
            f"ID: {txn.id:5d} | {txn.date.isoformat()} | {txn.amount:>12,.2f} | "
            f"{method:8s} | {txn.note or ''}"
        )
    click.echo("-" * 72)
    click.echo(f"Total: {history.total_amount:,.2f} ({len(history.payments)} payments)")


def register_commands(cli):
    """Register payments command with main CLI."""
    cli.add_command(list_payments)
