"""CLI helpers for date range resolution."""

from datetime import datetime

import click

from ledgerkit.utils.date_parser import end_of_day, local_to_utc, parse_date, start_of_day


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
) -> tuple[datetime | None, datetime | None]:
    """Resolve --start-date/--end-date into an inclusive range.

    Dates are whole days in the host's local time zone; the returned bounds
    are naive UTC, matching stored timestamps.
    """
    start = None
    end = None

    if start_date:
        try:
            start = start_of_day(parse_date(start_date))
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = end_of_day(parse_date(end_date))
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date is after end date", err=True)
        ctx.exit(1)

    return (
        None if start is None else local_to_utc(start),
        None if end is None else local_to_utc(end),
    )
