"""Main CLI entry point."""

import logging

import click
from ledgerdesk.database.factories import create_sqlite_database
from ledgerdesk.domain.events import EventBus

# Import and register all commands at module level
from ledgerdesk.cli.commands import (
    account,
    charge,
    ledger,
    pay,
    payments,
    receipt,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERDESK_DB_PATH environment variable)",
    envvar="LEDGERDESK_DB_PATH",
)
@click.option(
    "--language",
    type=click.Choice(["fr", "en", "ar"], case_sensitive=False),
    default="fr",
    show_default=True,
    envvar="LEDGERDESK_LANGUAGE",
    help="Language for receipts and dates",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERDESK_LOG_LEVEL",
    help="Logging verbosity (logs go to stderr)",
)
@click.pass_context
def cli(ctx, db_path: str | None, language: str, log_level: str):
    """Ledgerdesk - client and supplier balance ledger.

    Record payments and charges against client and supplier accounts, keep
    their running balances, and print payment receipts.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)

    ctx.obj["language"] = language.lower()
    ctx.obj["events"] = EventBus()

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
charge.register_commands(cli)
pay.register_commands(cli)
payments.register_commands(cli)
receipt.register_commands(cli)
ledger.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
