"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from ledgerkit.config import LedgerSettings, get_settings
from ledgerkit.database.sqlalchemy_db import SQLAlchemyDatabase


def default_database_url() -> str:
    """Return the default SQLite URL, ~/.ledgerkit/ledgerkit.db."""
    db_dir = Path.home() / ".ledgerkit"
    db_dir.mkdir(exist_ok=True)
    return f"sqlite:///{db_dir / 'ledgerkit.db'}"


def create_database(
    database_url: Optional[str] = None, settings: Optional[LedgerSettings] = None
) -> SQLAlchemyDatabase:
    """Create a database instance.

    Args:
        database_url: SQLAlchemy URL. If None, uses the LEDGERKIT_DATABASE_URL
            setting, then defaults to ~/.ledgerkit/ledgerkit.db

    Returns:
        SQLAlchemyDatabase instance (not yet connected)
    """
    settings = settings or get_settings()
    if database_url is None:
        database_url = settings.database_url or default_database_url()
    return SQLAlchemyDatabase(database_url, sqlite_busy_timeout=settings.sqlite_busy_timeout)


def create_sqlite_database(
    database_path: str, settings: Optional[LedgerSettings] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance for a file path."""
    return create_database(f"sqlite:///{database_path}", settings=settings)
