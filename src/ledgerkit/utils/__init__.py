"""Utility functions for ledgerkit."""

from ledgerkit.utils.date_parser import parse_date, start_of_day, end_of_day, local_to_utc
from ledgerkit.utils.amount_parser import parse_amount

__all__ = ["parse_date", "start_of_day", "end_of_day", "local_to_utc", "parse_amount"]
