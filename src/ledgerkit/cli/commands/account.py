"""Account management commands."""

import click
from ledgerkit.cli.error_handling import handle_domain_error, handle_persistence_error
from ledgerkit.cli.formatting import format_money
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import AccountFilter, Pagination, SortRequest
from ledgerkit.domain.errors import DomainError, PersistenceError
from ledgerkit.domain.money import parse_currency
from ledgerkit.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.option("--user", "user_id", type=int, required=True, help="Owning user ID")
@click.option("--currency", default="USD", show_default=True, help="USD, EUR or GBP")
@click.option("--name", help="Account name")
@click.option("--description", help="Account description")
@click.pass_context
def create_account(ctx, user_id: int, currency: str, name: str | None, description: str | None):
    """Open a new account with a zero balance.

    Examples:
        ledgerkit account create --user 1
        ledgerkit account create --user 1 --currency EUR --name "Travel"
    """
    service = AccountService(ctx.obj["db"], ctx.obj["settings"])

    try:
        account = service.create_account(
            user_id=user_id, currency=currency, name=name, description=description
        )
        label = f" '{account.name}'" if account.name else ""
        click.echo(f"Created {account.currency.value} account{label} (ID: {account.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)


@account_group.command("list")
@click.option("--user", "user_id", type=int, required=True, help="Owning user ID")
@click.option("--currency", help="Only accounts in this currency")
@click.option("--min-balance", help="Minimum balance")
@click.option("--max-balance", help="Maximum balance")
@click.option("--sort", "sort_field", help="Sort by balance, currency or created_at")
@click.option("--direction", type=click.Choice(["ASC", "DESC"], case_sensitive=False))
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, help="Accounts per page")
@click.pass_context
def list_accounts(
    ctx,
    user_id: int,
    currency: str | None,
    min_balance: str | None,
    max_balance: str | None,
    sort_field: str | None,
    direction: str | None,
    page: int,
    page_size: int | None,
):
    """List a user's accounts."""
    settings = ctx.obj["settings"]
    service = AccountService(ctx.obj["db"], settings)

    try:
        account_filter = AccountFilter(
            min_balance=parse_amount(min_balance) if min_balance else None,
            max_balance=parse_amount(max_balance) if max_balance else None,
            currency=parse_currency(currency) if currency else None,
        )
        result = service.list_accounts(
            user_id,
            account_filter=account_filter,
            sort=SortRequest(field=sort_field, direction=direction) if sort_field else None,
            pagination=Pagination(page=page, page_size=page_size or settings.default_page_size),
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    except PersistenceError as e:
        handle_persistence_error(ctx, e)
        return

    if not result.items:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in result.items:
        name = acc.name or ""
        click.echo(
            f"ID: {acc.id:3d} | {name:20s} | {format_money(acc.balance, acc.currency):>16s}"
        )
    click.echo(f"\nPage {result.page} of {result.total_pages} ({result.total_count} accounts)")


@account_group.command("balance")
@click.option("--user", "user_id", type=int, required=True, help="Owning user ID")
@click.pass_context
def show_balance(ctx, user_id: int):
    """Show a user's balances per currency."""
    service = AccountService(ctx.obj["db"], ctx.obj["settings"])
    try:
        summary = service.get_balances(user_id)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)
        return

    if not summary.accounts:
        click.echo("No accounts found.")
        return

    for acc in summary.accounts:
        click.echo(f"Account {acc.id:3d}: {format_money(acc.balance, acc.currency)}")
    click.echo("-" * 40)
    for currency, total in sorted(summary.balances_by_currency.items()):
        click.echo(f"Total {currency.value}: {format_money(total, currency)}")


@account_group.command("delete")
@click.argument("account_id", type=int)
@click.option("--user", "user_id", type=int, required=True, help="Owning user ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account_id: int, user_id: int, yes: bool):
    """Delete an account with no transactions."""
    service = AccountService(ctx.obj["db"], ctx.obj["settings"])

    try:
        service.verify_ownership(account_id, user_id)
        if not yes and not click.confirm(f"Delete account {account_id}?"):
            click.echo("Cancelled.")
            return
        service.delete_account(account_id)
        click.echo(f"Deleted account {account_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
