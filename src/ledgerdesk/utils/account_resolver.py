"""Utility for resolving account references to IDs."""

import re

from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.errors import NotFoundError

_ACCOUNT_CODE = re.compile(r"^(CL|FR)-0*(\d+)$", re.IGNORECASE)


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account ID, printed code or display name to an account ID.

    Args:
        account_service: AccountService instance
        account: Account ID (int or numeric string), code such as "CL-0007",
            or display name (case-insensitive)

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches, or a name matches several accounts
    """
    if isinstance(account, int):
        account_service.require_account(account)
        return account

    text = str(account).strip()
    if text.isdigit():
        return account_service.require_account(int(text)).id

    code = _ACCOUNT_CODE.match(text)
    if code:
        found = account_service.get_account(int(code.group(2)))
        if found is not None and found.code.upper() == f"{code.group(1).upper()}-000{found.id}":
            return found.id
        raise NotFoundError(f"Account '{text}' not found")

    matches = [
        acc for acc in account_service.list_accounts()
        if acc.display_name.lower() == text.lower()
    ]
    if len(matches) == 1:
        return matches[0].id
    if len(matches) > 1:
        ids = ", ".join(str(acc.id) for acc in matches)
        raise NotFoundError(f"Account name '{text}' is ambiguous (IDs: {ids}); use the ID")
    raise NotFoundError(f"Account '{text}' not found")
