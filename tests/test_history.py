"""Tests for the history command."""

from decimal import Decimal

from ledgerkit.cli.main import cli


def _history(cli_runner, db_url, user_id, *extra):
    return cli_runner.invoke(cli, ["--db-url", db_url, "history", "--user", str(user_id), *extra])


def test_history_empty(cli_runner, db_url, sample_account):
    result = _history(cli_runner, db_url, sample_account.user_id)

    assert result.exit_code == 0
    assert "No transactions found" in result.output


def test_history_lists_signed_amounts(cli_runner, db_url, movement_service, funded_account):
    movement_service.withdraw(funded_account.id, Decimal("12.50"))

    result = _history(cli_runner, db_url, funded_account.user_id)

    assert result.exit_code == 0
    assert "100.00" in result.output
    assert "-12.50" in result.output
    assert "Page 1 of 1 (2 transactions)" in result.output


def test_history_filter_by_type(cli_runner, db_url, movement_service, funded_account):
    movement_service.withdraw(funded_account.id, Decimal("12.50"))

    result = _history(cli_runner, db_url, funded_account.user_id, "--type", "withdrawal")

    assert result.exit_code == 0
    assert "-12.50" in result.output
    assert "(1 transactions)" in result.output


def test_history_paging(cli_runner, db_url, movement_service, funded_account):
    for _ in range(3):
        movement_service.deposit(funded_account.id, Decimal("1.00"))

    result = _history(
        cli_runner, db_url, funded_account.user_id, "--page", "2", "--page-size", "3"
    )

    assert result.exit_code == 0
    assert "Page 2 of 2 (4 transactions)" in result.output


def test_history_rejects_oversized_page(cli_runner, db_url, funded_account):
    result = _history(cli_runner, db_url, funded_account.user_id, "--page-size", "1000")

    assert result.exit_code == 1
    assert "exceeds maximum" in result.output


def test_history_rejects_bad_date(cli_runner, db_url, funded_account):
    result = _history(cli_runner, db_url, funded_account.user_id, "--start-date", "not a date")

    assert result.exit_code == 1
    assert "Invalid start date" in result.output


def test_history_today_away_from_utc(cli_runner, db_url, far_east_timezone, funded_account):
    """A movement made today is listed under --start-date/--end-date today at UTC+14."""
    result = _history(
        cli_runner, db_url, funded_account.user_id, "--start-date", "today", "--end-date", "today"
    )

    assert result.exit_code == 0
    assert "(1 transactions)" in result.output
