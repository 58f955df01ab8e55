"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from spendlog.store.queries import (
    delete_all_expenses,
    delete_expense,
    get_all_expenses,
    get_category_totals,
    get_expense_by_id,
    get_expenses_by_category,
    get_expenses_by_date_range,
    get_expenses_since,
    get_total_by_category,
    get_total_expenses,
    insert_expense,
    update_expense,
)
from spendlog.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_all_expenses",
    "delete_expense",
    "get_all_expenses",
    "get_category_totals",
    "get_expense_by_id",
    "get_expenses_by_category",
    "get_expenses_by_date_range",
    "get_expenses_since",
    "get_total_by_category",
    "get_total_expenses",
    "insert_expense",
    "update_expense",
]
