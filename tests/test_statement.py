"""Tests for statement commands."""

from decimal import Decimal

from sqlalchemy.exc import OperationalError

from ledgerkit.cli.main import cli
from ledgerkit.database.sqlalchemy_db import SQLAlchemyLedgerHandle


def test_statement_show(cli_runner, db_url, movement_service, funded_account):
    movement_service.withdraw(funded_account.id, Decimal("25.00"))

    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "statement", "show", "--user", str(funded_account.user_id),
         "--start-date", "last year", "--end-date", "tomorrow"],
    )

    assert result.exit_code == 0, result.output
    assert "Statement for Ada Lovelace" in result.output
    assert "-25.00" in result.output
    assert "Closing balance: 75.00" in result.output


def test_statement_save_and_list(cli_runner, db_url, funded_account, tmp_path):
    out_dir = tmp_path / "statements"
    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "statement", "show", "--user", str(funded_account.user_id),
         "--start-date", "2000-01-01", "--end-date", "2100-01-01",
         "--currency", "USD", "--save-to", str(out_dir)],
    )

    assert result.exit_code == 0, result.output
    assert "Closing balance: $100.00" in result.output
    assert "Saved statement 1" in result.output
    files = list(out_dir.iterdir())
    assert len(files) == 1
    assert "Closing balance: $100.00" in files[0].read_text(encoding="utf-8")

    result = cli_runner.invoke(
        cli, ["--db-url", db_url, "statement", "list", "--user", str(funded_account.user_id)]
    )
    assert result.exit_code == 0
    assert str(files[0]) in result.output


def test_statement_unknown_user(cli_runner, db_url):
    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "statement", "show", "--user", "99",
         "--start-date", "2026-01-01", "--end-date", "2026-01-31"],
    )

    assert result.exit_code == 1
    assert "User 99 not found" in result.output


def test_statement_list_store_failure_shows_generic_error(cli_runner, db_url, sample_user, monkeypatch):
    def broken_count(self, user_id):
        raise OperationalError("SELECT count", {}, Exception("database is locked"))

    monkeypatch.setattr(SQLAlchemyLedgerHandle, "count_statements", broken_count)

    result = cli_runner.invoke(
        cli,
        ["--db-url", db_url, "--log-level", "CRITICAL", "statement", "list",
         "--user", str(sample_user.id)],
    )

    assert result.exit_code == 1
    assert "Error: operation failed" in result.output
