"""Deposit and withdrawal commands."""

import click
from ledgerkit.cli.error_handling import handle_domain_error, handle_persistence_error
from ledgerkit.cli.formatting import format_money
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import DomainError, PersistenceError
from ledgerkit.domain.movement import MoneyMovementService
from ledgerkit.utils.amount_parser import parse_amount


def _movement_options(func):
    func = click.option("--idempotency-key", help="Repeat-safe request key")(func)
    func = click.option("--user", "user_id", type=int, help="Check the account belongs to this user")(func)
    func = click.option("--amount", required=True, help="Amount (e.g., 100, $12.50, 1,000.00)")(func)
    func = click.option("--account", "account_id", type=int, required=True, help="Account ID")(func)
    return func


def _run_movement(ctx, kind: str, account_id: int, amount: str, user_id: int | None, idempotency_key: str | None):
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    accounts = AccountService(db, settings)
    movements = MoneyMovementService(db, settings)

    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)

    try:
        if user_id is not None:
            account = accounts.verify_ownership(account_id, user_id)
        else:
            account = accounts.require_account(account_id)

        if kind == "deposit":
            result = movements.deposit(account_id, value, idempotency_key=idempotency_key)
        else:
            result = movements.withdraw(account_id, value, idempotency_key=idempotency_key)

        updated = accounts.require_account(account_id)
        click.echo(f"{kind.capitalize()} completed (ID: {result.transaction_id})")
        click.echo(f"Reference: {result.reference_id}")
        click.echo(f"Balance: {format_money(updated.balance, account.currency)}")
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)


@click.command("deposit")
@_movement_options
@click.pass_context
def deposit(ctx, account_id: int, amount: str, user_id: int | None, idempotency_key: str | None):
    """Credit an account.

    Examples:
        ledgerkit deposit --account 1 --amount 100
        ledgerkit deposit --account 1 --amount "$12.50" --user 1
    """
    _run_movement(ctx, "deposit", account_id, amount, user_id, idempotency_key)


@click.command("withdraw")
@_movement_options
@click.pass_context
def withdraw(ctx, account_id: int, amount: str, user_id: int | None, idempotency_key: str | None):
    """Debit an account if its balance covers the amount.

    Examples:
        ledgerkit withdraw --account 1 --amount 40
    """
    _run_movement(ctx, "withdrawal", account_id, amount, user_id, idempotency_key)


def register_commands(cli):
    """Register deposit and withdraw commands with main CLI."""
    cli.add_command(deposit)
    cli.add_command(withdraw)
