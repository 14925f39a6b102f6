"""Shared pytest fixtures for ledgerkit tests."""

import logging
import tempfile
import os
from decimal import Decimal
import pytest

from ledgerkit.config import get_settings
from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.movement import MoneyMovementService
from ledgerkit.domain.statement import StatementService
from ledgerkit.domain.transaction import TransactionQueryService
from ledgerkit.domain.user import UserService


@pytest.fixture
def settings():
    """Default settings, ignoring any local .env file."""
    return get_settings(_env_file=None)


@pytest.fixture
def temp_db(settings):
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path, settings=settings)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def db_url(temp_db):
    """SQLAlchemy URL of the temporary database, for CLI tests."""
    return f"sqlite:///{temp_db.database_path}"


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def account_service(temp_db, settings):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db, settings)


@pytest.fixture
def movement_service(temp_db, settings):
    """Create a MoneyMovementService with a temporary database."""
    return MoneyMovementService(temp_db, settings)


@pytest.fixture
def query_service(temp_db, settings):
    """Create a TransactionQueryService with a temporary database."""
    return TransactionQueryService(temp_db, settings)


@pytest.fixture
def statement_service(temp_db, settings):
    """Create a StatementService with a temporary database."""
    return StatementService(temp_db, settings)


@pytest.fixture
def sample_user(user_service):
    """Create a sample user for testing."""
    return user_service.create_user("Ada", "Lovelace", "ada@example.com")


@pytest.fixture
def sample_account(account_service, sample_user):
    """Create a sample USD account for testing."""
    return account_service.create_account(
        user_id=sample_user.id, currency="USD", name="Checking"
    )


@pytest.fixture
def funded_account(sample_account, movement_service):
    """Sample account holding 100.00."""
    movement_service.deposit(sample_account.id, Decimal("100.00"))
    return sample_account


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def reset_ledgerkit_logger():
    """Drop handlers the CLI attaches so they don't outlive the runner's streams."""
    yield
    logger = logging.getLogger("ledgerkit")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _host_timezone(monkeypatch, name):
    import time

    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", name)
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def utc_timezone(monkeypatch):
    """Run the test with the host clock at UTC."""
    yield from _host_timezone(monkeypatch, "UTC")


@pytest.fixture
def far_east_timezone(monkeypatch):
    """Run the test with the host clock at UTC+14."""
    yield from _host_timezone(monkeypatch, "Etc/GMT-14")
