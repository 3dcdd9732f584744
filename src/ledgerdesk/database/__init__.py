"""Database layer for ledgerdesk application."""

from ledgerdesk.database.base import Ledger, LedgerResponse
from ledgerdesk.database.factories import create_sqlite_database

__all__ = ["Ledger", "LedgerResponse", "create_sqlite_database"]
