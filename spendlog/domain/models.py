"""Domain type definitions for spendlog.

These types provide semantic clarity and help with type checking:
- Timestamp: Milliseconds since the Unix epoch
- CategoryName: Label classifying an expense
- Expense: A single recorded expense
- CategoryTotal / ExpenseStatistics: Derived, never stored
"""

import time
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import NewType

# Point in time as integer milliseconds since epoch
Timestamp = NewType("Timestamp", int)

# Category label, usually one of Category's display names
CategoryName = NewType("CategoryName", str)

# Shown as top category when there is nothing to aggregate
NOT_APPLICABLE = CategoryName("N/A")


def now_millis() -> Timestamp:
    """Get the current time in epoch milliseconds."""
    return Timestamp(time.time_ns() // 1_000_000)


@dataclass(frozen=True)
class Expense:
    """Immutable expense record.

    An id of 0 means the expense has not been persisted yet.
    """

    amount: Decimal
    category: CategoryName
    description: str
    date: Timestamp = field(default_factory=now_millis)
    id: int = 0


@dataclass(frozen=True)
class CategoryTotal:
    """Sum of expense amounts for one category."""

    category: CategoryName
    total: Decimal


@dataclass(frozen=True)
class ExpenseStatistics:
    """Summary statistics over a snapshot of expenses."""

    total: Decimal
    average: Decimal
    count: int
    top_category: CategoryName


class Category(Enum):
    """Suggested expense categories with their chart colours."""

    FOOD = ("Food", "#FF6B6B")
    TRANSPORT = ("Transport", "#4ECDC4")
    ENTERTAINMENT = ("Entertainment", "#FFBE0B")
    HEALTH = ("Health", "#95E1D3")
    EDUCATION = ("Education", "#9B59B6")
    SERVICES = ("Services", "#3498DB")
    SHOPPING = ("Shopping", "#E74C3C")
    OTHER = ("Other", "#95A5A6")

    def __init__(self, display_name: str, color: str) -> None:
        self.display_name = CategoryName(display_name)
        self.color = color

    @classmethod
    def display_names(cls) -> list[CategoryName]:
        """List display names in declaration order."""
        return [category.display_name for category in cls]

    @classmethod
    def color_for(cls, name: str) -> str:
        """Get the chart colour for a display name, falling back to Other."""
        for category in cls:
            if category.display_name == name:
                return category.color
        return cls.OTHER.color
