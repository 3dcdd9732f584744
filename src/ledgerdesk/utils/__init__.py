"""Utility functions for ledgerdesk."""

from ledgerdesk.utils.date_parser import parse_date
from ledgerdesk.utils.amount_parser import parse_amount
from ledgerdesk.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "resolve_account"]
