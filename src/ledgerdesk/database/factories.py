"""Database factory functions for creating ledger instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerdesk.database.sqlalchemy_db import SQLAlchemyLedger


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyLedger:
    """Create a SQLite-backed ledger instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERDESK_DB_PATH
            environment variable, then defaults to ~/.ledgerdesk/ledgerdesk.db

    Returns:
        SQLAlchemyLedger instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("LEDGERDESK_DB_PATH")

    if database_path is None:
        # Default to ~/.ledgerdesk/ledgerdesk.db
        home = Path.home()
        db_dir = home / ".ledgerdesk"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ledgerdesk.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyLedger(database_url)
