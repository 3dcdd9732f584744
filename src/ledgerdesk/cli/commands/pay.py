"""Pay command: record a payment and optionally print its receipt."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.commands.account import format_balance
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.entities import PaymentMethod, PaymentRequest
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.payment import PaymentService
from ledgerdesk.domain.receipt import build_receipt, render_receipt_lines
from ledgerdesk.utils.amount_parser import parse_amount
from ledgerdesk.utils.date_parser import parse_date

METHOD_CHOICES = ["cash", "cheque", "transfer", "especes", "virement"]


@click.command("pay")
@click.option("--account", required=True, help="Account ID, code or name")
@click.option("--amount", required=True, help="Amount paid (e.g., 1000 or 1 000,00)")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Payment date (YYYY-MM-DD, DD/MM/YYYY, 'today', 'yesterday')",
)
@click.option(
    "--method",
    required=True,
    type=click.Choice(METHOD_CHOICES, case_sensitive=False),
    help="Payment method",
)
@click.option("--note", help="Note")
@click.option("--reference", help="Cheque or transfer number")
@click.option("--receipt", "print_receipt", is_flag=True, help="Print the receipt")
@click.pass_context
def pay(
    ctx,
    account: str,
    amount: str,
    date: str,
    method: str,
    note: str | None,
    reference: str | None,
    print_receipt: bool,
):
    """Record a payment against an account.

    Examples:
        ledgerdesk pay --account 1 --amount 1000 --method cash
        ledgerdesk pay --account CL-0001 --amount 500 --method cheque --reference 8829 --receipt
    """
    db = ctx.obj["db"]
    language = ctx.obj["language"]
    events = ctx.obj["events"]
    account_service = AccountService(db, events)
    payment_service = PaymentService(db, events, language=language)

    acc = resolve_account_or_exit(ctx, account_service, account)

    try:
        payment_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        payment_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    request = PaymentRequest(
        amount=payment_amount,
        date=payment_date,
        method=PaymentMethod.parse(method),
        note=note,
        reference=reference,
    )

    try:
        result = payment_service.submit_payment(acc, request)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded payment {result.transaction_id} for {acc.display_name}")
    click.echo(f"  Date:             {result.display_date}")
    click.echo(f"  Amount:           {result.amount:,.2f} ({result.method.value})")
    click.echo(f"  Previous balance: {format_balance(result.previous_balance, result.previous_balance_sign)}")
    click.echo(f"  New balance:      {format_balance(result.new_balance, result.new_balance_sign)}")

    if print_receipt:
        click.echo("")
        for line in render_receipt_lines(build_receipt(acc, result, language=language)):
            click.echo(line)


def register_commands(cli):
    """Register pay command with main CLI."""
    cli.add_command(pay)
