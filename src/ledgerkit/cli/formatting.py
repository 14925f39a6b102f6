"""Output formatting for CLI commands."""

from decimal import Decimal

import click

from ledgerkit.domain.entities import Currency, Transaction

CURRENCY_SYMBOLS = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
}


def format_money(amount: Decimal, currency: Currency | None = None) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, "") if currency else ""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def print_transactions(transactions: list[Transaction]) -> None:
    """Print transactions as a fixed-width table."""
    click.echo(
        f"{'ID':>5s}  {'Date':16s}  {'Account':>7s}  {'Type':10s}  {'Amount':>14s}  Reference"
    )
    click.echo("-" * 96)
    for txn in transactions:
        click.echo(
            f"{txn.id:5d}  {txn.created_at:%Y-%m-%d %H:%M}  {txn.account_id:7d}  "
            f"{txn.type.value:10s}  {format_money(txn.signed_amount):>14s}  {txn.reference_id}"
        )
