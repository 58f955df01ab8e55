"""Summary and category commands for viewing aggregated spending."""

import sqlite3
from decimal import Decimal

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from spendlog.commands.common import compute_period, console, fail, require_database
from spendlog.config import get_setting
from spendlog.domain.aggregation import compute_category_totals, compute_statistics
from spendlog.domain.models import NOT_APPLICABLE, Category, ExpenseStatistics
from spendlog.domain.report import (
    CategoryShare,
    calculate_bar_length,
    create_category_shares,
    format_currency,
)
from spendlog.store.queries import get_all_expenses, get_expenses_by_date_range

BAR_WIDTH = 30
SORT_OPTIONS = ("value", "alpha")


def render_statistics(
    stats: ExpenseStatistics,
    top_share: CategoryShare | None,
    period: str,
    symbol: str,
) -> None:
    """Render the statistics panel."""
    top = escape(stats.top_category) if stats.top_category != NOT_APPLICABLE else "[dim]N/A[/dim]"
    lines = [
        f"[bold]Total spent:[/bold]  {format_currency(stats.total, symbol)}",
        f"[bold]Expenses:[/bold]     {stats.count}",
        f"[bold]Average:[/bold]      {format_currency(stats.average, symbol)}",
        f"[bold]Top category:[/bold] {top}",
    ]
    if top_share is not None:
        lines.append(f"[bold]Top total:[/bold]    {format_currency(top_share.total, symbol)}")
    console.print(Panel("\n".join(lines), title=f"[bold cyan]{period}[/bold cyan]", expand=False))


def render_category_line(share: CategoryShare, chart: bool, max_amount: Decimal, symbol: str) -> None:
    """Render a single category line, with a coloured bar when chart is on."""
    amount_display = format_currency(share.total, symbol)
    percent_display = f"{share.percentage:5.1f}%"
    name = escape(share.category)

    if chart:
        bar = "█" * calculate_bar_length(share.total, max_amount, BAR_WIDTH)
        console.print(f"  [{share.color}]●[/] {name:20} {amount_display:>14} {percent_display} [{share.color}]{bar}[/]")
    else:
        console.print(f"  {name}: {amount_display} ({percent_display.strip()})")


def summary_command(
    this_month: bool = False,
    month: str | None = None,
    sort_by: str = "value",
    chart: bool = True,
) -> None:
    """Show spending statistics and the per-category breakdown."""
    db_path = require_database()

    if sort_by not in SORT_OPTIONS:
        fail(f"Invalid sort '{sort_by}'. Use one of: {', '.join(SORT_OPTIONS)}")

    try:
        start, end, period = compute_period(this_month, month)
    except ValueError as e:
        fail(f"Invalid month: {e}", e)

    try:
        if start is not None and end is not None:
            snapshot = get_expenses_by_date_range(start, end, db_path)
        else:
            snapshot = get_all_expenses(db_path)
    except sqlite3.Error as e:
        fail(f"Database error: {e}", e)

    symbol = get_setting("currency_symbol")
    stats = compute_statistics(snapshot)
    shares = create_category_shares(compute_category_totals(snapshot), sort_by)
    top_share = next((share for share in shares if share.category == stats.top_category), None)
    render_statistics(stats, top_share, period, symbol)

    if not snapshot:
        console.print("[dim]No expenses recorded yet[/dim]")
        return

    max_amount = max(share.total for share in shares)

    console.print("\n[bold]Spending by category:[/bold]\n")
    for share in shares:
        render_category_line(share, chart, max_amount, symbol)


def categories_command() -> None:
    """List the suggested categories and their chart colours."""
    default = get_setting("default_category")

    table = Table(title="Categories")
    table.add_column("Category", style="white")
    table.add_column("Colour")

    for category in Category:
        marker = " [dim](default)[/dim]" if category.display_name == default else ""
        table.add_row(f"{category.display_name}{marker}", f"[{category.color}]● {category.color}[/]")

    console.print(table)
    console.print("[dim]Any other label is accepted as a custom category.[/dim]")
