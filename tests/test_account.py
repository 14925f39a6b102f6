"""Tests for user and account commands."""

from decimal import Decimal

from sqlalchemy.exc import OperationalError

from ledgerkit.cli.main import cli
from ledgerkit.database.sqlalchemy_db import SQLAlchemyLedgerHandle


def test_user_create_and_show(cli_runner, db_url):
    """Test creating a user and showing it."""
    result = cli_runner.invoke(
        cli, ["--db-url", db_url, "user", "create", "Ada", "Lovelace", "ada@example.com"]
    )

    assert result.exit_code == 0
    assert "Created user 'Ada Lovelace' (ID: 1)" in result.output

    result = cli_runner.invoke(cli, ["--db-url", db_url, "user", "show", "1"])
    assert result.exit_code == 0
    assert "ada@example.com" in result.output


def test_user_create_duplicate(cli_runner, db_url, sample_user):
    """Test creating a user with a registered email fails."""
    result = cli_runner.invoke(
        cli, ["--db-url", db_url, "user", "create", "Ada", "L", "ADA@example.com"]
    )

    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_account_create(cli_runner, db_url, sample_user):
    """Test opening an account."""
    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "account", "create", "--user", str(sample_user.id),
         "--currency", "eur", "--name", "Travel"],
    )

    assert result.exit_code == 0
    assert "Created EUR account 'Travel'" in result.output


def test_account_create_bad_currency(cli_runner, db_url, sample_user):
    """Test an unsupported currency is rejected."""
    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "account", "create", "--user", str(sample_user.id), "--currency", "JPY"],
    )

    assert result.exit_code == 1
    assert "Invalid currency" in result.output


def test_account_list_empty(cli_runner, db_url, sample_user):
    """Test listing accounts when none exist."""
    result = cli_runner.invoke(
        cli, ["--db-url", db_url, "account", "list", "--user", str(sample_user.id)]
    )

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_with_data(cli_runner, db_url, funded_account):
    """Test listing accounts with data."""
    result = cli_runner.invoke(
        cli, ["--db-url", db_url, "account", "list", "--user", str(funded_account.user_id)]
    )

    assert result.exit_code == 0
    assert "Checking" in result.output
    assert "$100.00" in result.output
    assert "Page 1 of 1 (1 accounts)" in result.output


def test_account_balance(cli_runner, db_url, account_service, movement_service, funded_account):
    """Test per-currency totals."""
    eur = account_service.create_account(funded_account.user_id, "EUR")
    movement_service.deposit(eur.id, Decimal("1234.5"))

    result = cli_runner.invoke(
        cli, ["--db-url", db_url, "account", "balance", "--user", str(funded_account.user_id)]
    )

    assert result.exit_code == 0
    assert "Total USD: $100.00" in result.output
    assert "Total EUR: €1,234.50" in result.output


def test_account_delete(cli_runner, db_url, account_service, sample_account):
    """Test deleting an account without history."""
    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "account", "delete", str(sample_account.id),
         "--user", str(sample_account.user_id)],
        input="y\n",
    )

    assert result.exit_code == 0
    assert f"Deleted account {sample_account.id}" in result.output
    assert account_service.get_account(sample_account.id) is None


def test_account_delete_with_history(cli_runner, db_url, funded_account):
    """Test an account with transactions cannot be deleted."""
    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "account", "delete", str(funded_account.id),
         "--user", str(funded_account.user_id), "--yes"],
    )

    assert result.exit_code == 1
    assert "append-only" in result.output


def test_account_list_store_failure_shows_generic_error(cli_runner, db_url, funded_account, monkeypatch):
    """Test a store fault while listing is reported without a traceback."""
    def broken_count(self, user_id, account_filter):
        raise OperationalError("SELECT count", {}, Exception("database is locked"))

    monkeypatch.setattr(SQLAlchemyLedgerHandle, "count_accounts", broken_count)

    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "--log-level", "CRITICAL", "account", "list",
         "--user", str(funded_account.user_id)],
    )

    assert result.exit_code == 1
    assert "Error: operation failed" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_account_list_sub_cent_bound(cli_runner, db_url, funded_account):
    """Test a sub-cent balance bound is rounded, not a store error."""
    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "account", "list", "--user", str(funded_account.user_id),
         "--min-balance", "10.005"],
    )

    assert result.exit_code == 0
    assert "$100.00" in result.output
