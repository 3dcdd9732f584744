"""Account management commands."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.entities import AccountKind, BalanceSign
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.utils.amount_parser import parse_amount


def format_balance(magnitude, sign: BalanceSign) -> str:
    """Render a balance with its debtor/creditor label."""
    label = "owes" if sign == BalanceSign.DEBIT else "credit"
    return f"{magnitude:,.2f} ({label})"


@click.group()
def account_group():
    """Manage client and supplier accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--first-name", help="Client first name")
@click.option("--supplier", is_flag=True, help="Register a supplier (NAME is the company name)")
@click.option(
    "--balance",
    help="Opening balance; negative means the account owes money (e.g., -10000)",
)
@click.pass_context
def create_account(ctx, name: str, first_name: str | None, supplier: bool, balance: str | None):
    """Register a new account.

    Examples:
        ledgerdesk account create "Benali" --first-name "Karim"
        ledgerdesk account create "Benali" --first-name "Karim" --balance -10000
        ledgerdesk account create "Sarl Atlas" --supplier
    """
    db = ctx.obj["db"]
    service = AccountService(db, ctx.obj["events"])

    opening = None
    if balance is not None:
        try:
            opening = parse_amount(balance)
        except ValueError as e:
            click.echo(f"Error: Invalid balance: {e}", err=True)
            ctx.exit(1)

    kind = AccountKind.SUPPLIER if supplier else AccountKind.CLIENT
    try:
        account_id = service.create_account(
            kind=kind,
            last_name=name,
            first_name=first_name,
            company_name=name if supplier else None,
            opening_balance=opening,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    account = service.get_account(account_id)
    click.echo(f"Created {kind.value} '{account.display_name}' (ID: {account_id}, code: {account.code})")
    if opening:
        click.echo(f"Opening balance: {format_balance(account.balance_magnitude, account.balance_sign)}")


@account_group.command("list")
@click.option("--clients", "kind", flag_value=AccountKind.CLIENT.value, help="Only clients")
@click.option("--suppliers", "kind", flag_value=AccountKind.SUPPLIER.value, help="Only suppliers")
@click.pass_context
def list_accounts(ctx, kind: str | None):
    """List accounts with their balances."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(AccountKind(kind) if kind else None)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.code:9s} | {acc.display_name:24s} | "
            f"{format_balance(acc.balance_magnitude, acc.balance_sign)}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str) -> None:
    """Show one account's balance.

    ACCOUNT can be an ID, a code such as CL-0001, or a name.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    acc = resolve_account_or_exit(ctx, service, account)

    click.echo(f"{acc.code} {acc.display_name} ({acc.kind.value})")
    click.echo(f"  Balance:    {format_balance(acc.balance_magnitude, acc.balance_sign)}")
    click.echo(f"  Total paid: {acc.total_paid:,.2f}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
