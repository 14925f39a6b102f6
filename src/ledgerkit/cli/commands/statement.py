"""Statement commands."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import click
from ledgerkit.cli.date_filters import resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error, handle_persistence_error
from ledgerkit.cli.formatting import format_money, print_transactions
from ledgerkit.domain.entities import Currency, Pagination, StatementRequest, Transaction
from ledgerkit.domain.errors import DomainError, PersistenceError
from ledgerkit.domain.money import parse_currency
from ledgerkit.domain.statement import StatementService
from ledgerkit.utils.date_parser import parse_date


class TextFileRenderer:
    """Writes statements as plain text files into a directory."""

    def __init__(self, directory: Path, currency: Currency | None = None):
        self.directory = directory
        self.currency = currency

    def render(
        self,
        transactions: list[Transaction],
        closing_balance: Decimal,
        owner_id: int,
        owner_name: str,
    ) -> str:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"statement-{owner_id}-{datetime.now():%Y%m%d%H%M%S%f}.txt"
        lines = [f"Statement for {owner_name}", ""]
        for txn in transactions:
            lines.append(
                f"{txn.created_at:%Y-%m-%d}  {txn.type.value:10s}  "
                f"{format_money(txn.signed_amount):>14s}  {txn.reference_id}"
            )
        lines.append("")
        lines.append(f"Closing balance: {format_money(closing_balance, self.currency)}")
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)


@click.group()
def statement_group():
    """Prepare and list account statements."""
    pass


@statement_group.command("show")
@click.option("--user", "user_id", type=int, required=True, help="Statement owner")
@click.option("--start-date", required=True, help="First day of the period")
@click.option("--end-date", required=True, help="Last day of the period")
@click.option("--account", "account_id", type=int, help="Only this account")
@click.option("--currency", help="Only accounts in this currency")
@click.option("--limit", "item_count", type=int, help="Maximum number of transactions")
@click.option(
    "--save-to",
    type=click.Path(file_okay=False, path_type=Path),
    help="Also write the statement to this directory and record it",
)
@click.pass_context
def show_statement(
    ctx,
    user_id: int,
    start_date: str,
    end_date: str,
    account_id: int | None,
    currency: str | None,
    item_count: int | None,
    save_to: Path | None,
):
    """Show a statement for a period.

    Examples:
        ledgerkit statement show --user 1 --start-date "last month" --end-date today
        ledgerkit statement show --user 1 --start-date 2026-01-01 --end-date 2026-01-31 --save-to statements/
    """
    service = StatementService(ctx.obj["db"], ctx.obj["settings"])

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    try:
        request = StatementRequest(
            start_date=start,
            end_date=end,
            account_id=account_id,
            item_count=item_count,
            currency=parse_currency(currency) if currency else None,
        )
        data = service.prepare_statement(user_id, request)

        first_day, last_day = parse_date(start_date), parse_date(end_date)
        click.echo(f"Statement for {data.user.full_name} ({first_day} to {last_day})")
        click.echo("")
        if data.transactions:
            print_transactions(data.transactions)
        else:
            click.echo("No transactions in this period.")
        click.echo("")
        click.echo(f"Closing balance: {format_money(data.closing_balance, request.currency)}")

        if save_to is not None:
            record = service.generate_statement(
                user_id, request, TextFileRenderer(save_to, request.currency)
            )
            click.echo(f"Saved statement {record.id} to {record.location}")
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)


@statement_group.command("list")
@click.option("--user", "user_id", type=int, required=True, help="Statement owner")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, help="Statements per page")
@click.pass_context
def list_statements(ctx, user_id: int, page: int, page_size: int | None):
    """List recorded statements."""
    settings = ctx.obj["settings"]
    service = StatementService(ctx.obj["db"], settings)

    try:
        result = service.list_statements(
            user_id, Pagination(page=page, page_size=page_size or settings.default_page_size)
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    except PersistenceError as e:
        handle_persistence_error(ctx, e)
        return

    if not result.items:
        click.echo("No statements found.")
        return

    for record in result.items:
        click.echo(f"ID: {record.id:3d} | {record.statement_date:%Y-%m-%d %H:%M} | {record.location}")
    click.echo(f"\nPage {result.page} of {result.total_pages} ({result.total_count} statements)")


def register_commands(cli):
    """Register statement commands with main CLI."""
    cli.add_command(statement_group, name="statement")
