"""Database query functions for the expense store."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path
from typing import Any

from spendlog.domain.models import CategoryName, CategoryTotal, Expense, Timestamp
from spendlog.log import get_logger
from spendlog.store.schema import get_db_path

log = get_logger(__name__)

EXPENSE_COLUMNS = "id, amount, category, description, date"


@contextmanager
def _connect(db_path: Path | None = None) -> Iterator[sqlite3.Connection]:
    """Open a database connection with row factory, closed on exit.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Yields:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def to_cents(amount: Decimal) -> int:
    """Convert a Decimal amount to integer cents."""
    return int((amount * 100).to_integral_value())


def from_cents(cents: int | None) -> Decimal:
    """Convert integer cents to a Decimal amount with two places."""
    return Decimal(cents or 0).scaleb(-2)


def _row_to_expense(row: sqlite3.Row) -> Expense:
    return Expense(
        id=row["id"],
        amount=from_cents(row["amount"]),
        category=CategoryName(row["category"]),
        description=row["description"],
        date=Timestamp(row["date"]),
    )


def _fetch_expenses(query: str, params: list[Any], db_path: Path | None) -> list[Expense]:
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(query, params)
        return [_row_to_expense(row) for row in cursor.fetchall()]


def insert_expense(expense: Expense, db_path: Path | None = None) -> int:
    """Insert an expense.

    An expense with a non-zero id replaces the stored row with that id.

    Args:
        expense: Expense to store.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the stored expense.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            values = (to_cents(expense.amount), expense.category, expense.description, expense.date)
            if expense.id:
                cursor.execute(
                    "INSERT OR REPLACE INTO expenses (id, amount, category, description, date) VALUES (?, ?, ?, ?, ?)",
                    (expense.id, *values),
                )
            else:
                cursor.execute(
                    "INSERT INTO expenses (amount, category, description, date) VALUES (?, ?, ?, ?)",
                    values,
                )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        expense_id = expense.id or cursor.lastrowid
        log.debug("expense_inserted", expense_id=expense_id, category=expense.category)
        return int(expense_id)


def update_expense(expense: Expense, db_path: Path | None = None) -> bool:
    """Update an existing expense.

    Args:
        expense: Expense with the id of the row to update.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a row was updated, False if no expense has that id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "UPDATE expenses SET amount = ?, category = ?, description = ?, date = ? WHERE id = ?",
                (to_cents(expense.amount), expense.category, expense.description, expense.date, expense.id),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        updated = cursor.rowcount > 0
        log.debug("expense_updated", expense_id=expense.id, updated=updated)
        return updated


def delete_expense(expense_id: int, db_path: Path | None = None) -> bool:
    """Delete an expense by id.

    Args:
        expense_id: Expense ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a row was deleted, False if no expense has that id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        deleted = cursor.rowcount > 0
        log.debug("expense_deleted", expense_id=expense_id, deleted=deleted)
        return deleted


def delete_all_expenses(db_path: Path | None = None) -> int:
    """Delete every expense.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Number of expenses deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM expenses")
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

        log.debug("expenses_cleared", count=cursor.rowcount)
        return cursor.rowcount


def get_expense_by_id(expense_id: int, db_path: Path | None = None) -> Expense | None:
    """Get a single expense.

    Args:
        expense_id: Expense ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Expense or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    expenses = _fetch_expenses(f"SELECT {EXPENSE_COLUMNS} FROM expenses WHERE id = ?", [expense_id], db_path)
    return expenses[0] if expenses else None


def get_all_expenses(db_path: Path | None = None, limit: int | None = None) -> list[Expense]:
    """Get all expenses.

    Args:
        db_path: Path to the database file. If None, uses default location.
        limit: Maximum number of expenses to return. If None, returns all.

    Returns:
        List of expenses ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    query = f"SELECT {EXPENSE_COLUMNS} FROM expenses ORDER BY date DESC, id DESC"
    params: list[Any] = []

    if limit is not None:
        query += " LIMIT ?"
        params.append(limit)

    return _fetch_expenses(query, params, db_path)


def get_expenses_by_category(category: CategoryName, db_path: Path | None = None) -> list[Expense]:
    """Get expenses in one category.

    Args:
        category: Exact category label.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of expenses ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _fetch_expenses(
        f"SELECT {EXPENSE_COLUMNS} FROM expenses WHERE category = ? ORDER BY date DESC, id DESC",
        [category],
        db_path,
    )


def get_expenses_by_date_range(start: Timestamp, end: Timestamp, db_path: Path | None = None) -> list[Expense]:
    """Get expenses dated within [start, end], both bounds inclusive.

    Args:
        start: Range start in epoch milliseconds.
        end: Range end in epoch milliseconds.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of expenses ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _fetch_expenses(
        f"SELECT {EXPENSE_COLUMNS} FROM expenses WHERE date BETWEEN ? AND ? ORDER BY date DESC, id DESC",
        [start, end],
        db_path,
    )


def get_expenses_since(start: Timestamp, db_path: Path | None = None) -> list[Expense]:
    """Get expenses dated at or after start.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _fetch_expenses(
        f"SELECT {EXPENSE_COLUMNS} FROM expenses WHERE date >= ? ORDER BY date DESC, id DESC",
        [start],
        db_path,
    )


def get_total_expenses(db_path: Path | None = None) -> Decimal:
    """Get the sum of all expense amounts, 0 when there are none.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT SUM(amount) FROM expenses")
        return from_cents(cursor.fetchone()[0])


def get_total_by_category(category: CategoryName, db_path: Path | None = None) -> Decimal:
    """Get the sum of amounts in one category, 0 when there are none.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT SUM(amount) FROM expenses WHERE category = ?", (category,))
        return from_cents(cursor.fetchone()[0])


def get_category_totals(db_path: Path | None = None) -> list[CategoryTotal]:
    """Get spending totals grouped by category.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        One CategoryTotal per stored category.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT category, SUM(amount) FROM expenses GROUP BY category")
        rows = cursor.fetchall()
        return [CategoryTotal(category=CategoryName(row[0]), total=from_cents(row[1])) for row in rows]
