"""Domain models and types for spendlog.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from spendlog.domain.models import (
    NOT_APPLICABLE,
    Category,
    CategoryName,
    CategoryTotal,
    Expense,
    ExpenseStatistics,
    Timestamp,
)

__all__ = [
    "NOT_APPLICABLE",
    "Category",
    "CategoryName",
    "CategoryTotal",
    "Expense",
    "ExpenseStatistics",
    "Timestamp",
]
