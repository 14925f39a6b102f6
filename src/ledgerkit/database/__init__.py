"""Database layer for ledgerkit."""

from ledgerkit.database.base import Database, IsolationLevel, LedgerHandle
from ledgerkit.database.factories import create_database, create_sqlite_database

__all__ = [
    "Database",
    "IsolationLevel",
    "LedgerHandle",
    "create_database",
    "create_sqlite_database",
]
