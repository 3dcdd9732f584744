"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.entities import Account
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> Account:
    """Resolve an account reference to its entity, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        account_id = resolve_account(account_service, account)
        return account_service.require_account(account_id)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
