"""Pure functions for expense aggregation.

This module contains the functional core for summaries:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Every function takes a snapshot sequence of expenses and returns newly
built values. The snapshot is never modified.
"""

from collections.abc import Sequence
from decimal import Decimal

from spendlog.domain.models import (
    NOT_APPLICABLE,
    CategoryName,
    CategoryTotal,
    Expense,
    ExpenseStatistics,
    Timestamp,
)


def compute_total(expenses: Sequence[Expense]) -> Decimal:
    """Sum the amounts of all expenses.

    Args:
        expenses: Snapshot of expenses.

    Returns:
        Total amount, Decimal(0) for an empty snapshot.
    """
    return sum((expense.amount for expense in expenses), Decimal(0))


def compute_category_totals(expenses: Sequence[Expense]) -> list[CategoryTotal]:
    """Group expenses by exact category label and sum each group.

    Args:
        expenses: Snapshot of expenses.

    Returns:
        One CategoryTotal per category present in the snapshot, in the order
        each category is first encountered. Callers sort for display.
    """
    totals: dict[CategoryName, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, Decimal(0)) + expense.amount

    return [CategoryTotal(category=category, total=total) for category, total in totals.items()]


def find_top_category(totals: Sequence[CategoryTotal]) -> CategoryName:
    """Pick the category with the largest total.

    Ties go to the lexicographically smallest label so the result does not
    depend on input order.

    Args:
        totals: Category totals.

    Returns:
        Category name, or NOT_APPLICABLE when there are no totals.
    """
    if not totals:
        return NOT_APPLICABLE

    best = min(totals, key=lambda ct: (-ct.total, ct.category))
    return best.category


def compute_statistics(expenses: Sequence[Expense]) -> ExpenseStatistics:
    """Compute total, average, count and top category.

    Args:
        expenses: Snapshot of expenses.

    Returns:
        ExpenseStatistics. An empty snapshot gives zeros and NOT_APPLICABLE.
    """
    total = compute_total(expenses)
    count = len(expenses)
    average = total / count if count > 0 else Decimal(0)
    top_category = find_top_category(compute_category_totals(expenses))

    return ExpenseStatistics(
        total=total,
        average=average,
        count=count,
        top_category=top_category,
    )


def filter_by_date_range(expenses: Sequence[Expense], start: Timestamp, end: Timestamp) -> list[Expense]:
    """Keep expenses dated within [start, end], both bounds inclusive.

    Args:
        expenses: Snapshot of expenses.
        start: Range start in epoch milliseconds.
        end: Range end in epoch milliseconds.

    Returns:
        Matching expenses in their original order.
    """
    return [expense for expense in expenses if start <= expense.date <= end]
