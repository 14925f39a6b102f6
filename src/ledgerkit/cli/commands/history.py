"""Transaction history commands."""

import click
from ledgerkit.cli.date_filters import resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error, handle_persistence_error
from ledgerkit.cli.formatting import print_transactions
from ledgerkit.domain.entities import (
    Pagination,
    SortRequest,
    TransactionFilter,
    TransactionStatus,
    TransactionType,
)
from ledgerkit.domain.errors import DomainError, PersistenceError
from ledgerkit.domain.transaction import TransactionQueryService
from ledgerkit.utils.amount_parser import parse_amount


@click.command("history")
@click.option("--user", "user_id", type=int, required=True, help="User whose transactions to list")
@click.option("--account", "account_id", type=int, help="Only this account")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--min-amount", help="Minimum amount")
@click.option("--max-amount", help="Maximum amount")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Only deposits or withdrawals",
)
@click.option(
    "--status",
    type=click.Choice([s.value for s in TransactionStatus], case_sensitive=False),
    help="Only transactions with this status",
)
@click.option("--sort", "sort_field", help="Sort by amount, type, status or created_at")
@click.option("--direction", type=click.Choice(["ASC", "DESC"], case_sensitive=False))
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, help="Transactions per page")
@click.pass_context
def history(
    ctx,
    user_id: int,
    account_id: int | None,
    start_date: str | None,
    end_date: str | None,
    min_amount: str | None,
    max_amount: str | None,
    transaction_type: str | None,
    status: str | None,
    sort_field: str | None,
    direction: str | None,
    page: int,
    page_size: int | None,
):
    """List a user's transactions, most recent first.

    Examples:
        ledgerkit history --user 1
        ledgerkit history --user 1 --type WITHDRAWAL --min-amount 50
        ledgerkit history --user 1 --sort amount --direction ASC --page 2
    """
    settings = ctx.obj["settings"]
    service = TransactionQueryService(ctx.obj["db"], settings)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    try:
        transaction_filter = TransactionFilter(
            min_amount=parse_amount(min_amount) if min_amount else None,
            max_amount=parse_amount(max_amount) if max_amount else None,
            type=TransactionType(transaction_type.upper()) if transaction_type else None,
            status=TransactionStatus(status.lower()) if status else None,
            date_from=start,
            date_to=end,
            account_id=account_id,
        )
        result = service.list_transactions(
            user_id,
            transaction_filter=transaction_filter,
            sort=SortRequest(field=sort_field, direction=direction),
            pagination=Pagination(page=page, page_size=page_size or settings.default_page_size),
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    except PersistenceError as e:
        handle_persistence_error(ctx, e)
        return

    if not result.items:
        click.echo("No transactions found.")
        return

    print_transactions(result.items)
    click.echo(
        f"\nPage {result.page} of {result.total_pages} ({result.total_count} transactions)"
    )


def register_commands(cli):
    """Register history command with main CLI."""
    cli.add_command(history)
