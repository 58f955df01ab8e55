"""Helpers shared by the command modules."""

import sys
from decimal import Decimal
from pathlib import Path
from typing import NoReturn

import pandas as pd
from rich.console import Console
from rich.markup import escape

from spendlog.config import get_setting
from spendlog.dates import (
    end_of_current_month,
    format_month_label,
    month_bounds,
    parse_month,
    start_of_current_month,
    to_millis,
)
from spendlog.domain.models import Timestamp
from spendlog.domain.report import format_currency
from spendlog.log import get_logger
from spendlog.store.schema import database_exists, get_db_path

console = Console()
log = get_logger(__name__)


def require_database() -> Path:
    """Resolve the database path, exiting if it hasn't been initialized."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendlog init' first.[/red]", style="bold")
        console.print(f"[dim]Expected location: {db_path}[/dim]")
        sys.exit(1)
    return db_path


def fail(message: str, error: Exception | None = None) -> NoReturn:
    """Report a failure and exit with status 1."""
    if error is not None:
        log.error("command_failed", message=message, error=str(error))
    console.print(f"[red]{escape(message)}[/red]", style="bold")
    sys.exit(1)


def money(amount: Decimal) -> str:
    """Format an amount with the configured currency symbol."""
    return format_currency(amount, get_setting("currency_symbol"))


def parse_date_input(text: str) -> Timestamp:
    """Parse a user-supplied date into epoch milliseconds.

    Accepts YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY and other formats pandas
    understands. Day-first is assumed unless the text starts with a year.

    Raises:
        ValueError: If the text is not a date.
    """
    parsed = pd.to_datetime(text, dayfirst=not text[:4].isdigit())
    if pd.isna(parsed):
        raise ValueError(f"Invalid date: '{text}'")
    return to_millis(parsed.to_pydatetime())


def compute_period(this_month: bool, month: str | None) -> tuple[Timestamp | None, Timestamp | None, str]:
    """Compute the date range and label for a listing or summary.

    Args:
        this_month: Restrict to the current month.
        month: Specific month (YYYY-MM). Takes precedence over this_month.

    Returns:
        Tuple of (start, end, period_label). start and end are None for all time.

    Raises:
        ValueError: If month is not a valid YYYY-MM string.
    """
    if month:
        year, month_int = parse_month(month)
        start, end = month_bounds(year, month_int)
        return start, end, format_month_label(start)

    if this_month:
        start = start_of_current_month()
        return start, end_of_current_month(), "This month"

    return None, None, "All time"
