"""Pure functions for summary presentation calculations.

This module contains the functional core for rendering summaries:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from spendlog.domain.models import Category, CategoryName, CategoryTotal


@dataclass(frozen=True)
class CategoryShare:
    """Immutable category slice of a summary chart."""

    category: CategoryName
    total: Decimal
    percentage: float
    color: str


def sort_category_totals(
    totals: Sequence[CategoryTotal],
    sort_by: str = "value",
) -> list[CategoryTotal]:
    """Sort category totals by value or alphabetically.

    Args:
        totals: Category totals in any order.
        sort_by: Sort method - "value" (largest first) or "alpha".

    Returns:
        Sorted list of category totals.
    """
    if sort_by == "alpha":
        return sorted(totals, key=lambda ct: ct.category)
    else:
        return sorted(totals, key=lambda ct: (-ct.total, ct.category))


def calculate_percentage(amount: Decimal, total: Decimal) -> float:
    """Calculate the share of total as a percentage (0-100)."""
    if total <= 0:
        return 0.0
    return float(amount / total * 100)


def create_category_shares(
    totals: Sequence[CategoryTotal],
    sort_by: str = "value",
) -> list[CategoryShare]:
    """Create chart slices with percentages and colours.

    Args:
        totals: Category totals.
        sort_by: Sort method - "value" or "alpha".

    Returns:
        Sorted list of CategoryShare.
    """
    grand_total = sum((ct.total for ct in totals), Decimal(0))

    return [
        CategoryShare(
            category=ct.category,
            total=ct.total,
            percentage=calculate_percentage(ct.total, grand_total),
            color=Category.color_for(ct.category),
        )
        for ct in sort_category_totals(totals, sort_by)
    ]


def calculate_bar_length(
    amount: Decimal,
    max_amount: Decimal,
    bar_width: int,
) -> int:
    """Calculate chart bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def format_currency(amount: Decimal, symbol: str = "S/") -> str:
    """Format an amount with a currency symbol, e.g. S/ 1,234.50."""
    return f"{symbol} {amount:,.2f}"
