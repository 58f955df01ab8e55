"""Expense management commands (add, edit, delete, show, list)."""

import sqlite3
from dataclasses import replace
from decimal import Decimal
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from spendlog.commands.common import (
    compute_period,
    console,
    fail,
    money,
    parse_date_input,
    require_database,
)
from spendlog.config import get_setting
from spendlog.dates import format_date
from spendlog.domain.aggregation import compute_total, filter_by_date_range
from spendlog.domain.models import CategoryName, Expense, Timestamp
from spendlog.domain.report import format_currency
from spendlog.domain.validation import normalize_category, validate_expense_input
from spendlog.store.queries import (
    delete_expense,
    get_all_expenses,
    get_expense_by_id,
    get_expenses_by_category,
    get_expenses_by_date_range,
    insert_expense,
    update_expense,
)


def print_expense(expense: Expense) -> None:
    """Print the fields of a single expense."""
    console.print(f"  ID: {expense.id}")
    console.print(f"  Date: {format_date(expense.date, get_setting('date_format'))}")
    console.print(f"  Description: {escape(expense.description)}")
    console.print(f"  Amount: {money(expense.amount)}")
    console.print(f"  Category: {escape(expense.category)}")


def add_command(
    amount: str,
    description: str,
    category: str | None = None,
    date: str | None = None,
) -> None:
    """Record a new expense.

    Args:
        amount: Amount as typed, e.g. "25.50".
        description: Expense description.
        category: Optional category. Defaults to the configured default category.
        date: Optional date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to now.
    """
    db_path = require_database()

    error = validate_expense_input(amount, description)
    if error:
        fail(error)

    try:
        expense_date = parse_date_input(date) if date else None
    except ValueError as e:
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        fail(f"Invalid date format: {e}", e)

    fields = {
        "amount": Decimal(amount.strip()),
        "category": normalize_category(category or get_setting("default_category")),
        "description": description.strip(),
    }
    if expense_date is not None:
        fields["date"] = expense_date

    try:
        expense_id = insert_expense(Expense(**fields), db_path)
        expense = get_expense_by_id(expense_id, db_path)
    except sqlite3.Error as e:
        fail(f"Database error: {e}", e)

    console.print("[green]✓[/green] Expense saved:")
    if expense is not None:
        print_expense(expense)


def edit_command(
    expense_id: int,
    amount: str | None = None,
    description: str | None = None,
    category: str | None = None,
    date: str | None = None,
) -> None:
    """Update fields of an existing expense. Omitted fields are kept."""
    db_path = require_database()

    try:
        existing = get_expense_by_id(expense_id, db_path)
        if existing is None:
            fail(f"Expense {expense_id} not found")

        amount_text = amount if amount is not None else str(existing.amount)
        new_description = description if description is not None else existing.description

        error = validate_expense_input(amount_text, new_description)
        if error:
            fail(error)

        try:
            new_date = parse_date_input(date) if date else existing.date
        except ValueError as e:
            fail(f"Invalid date format: {e}", e)

        updated = replace(
            existing,
            amount=Decimal(amount_text.strip()),
            description=new_description.strip(),
            category=normalize_category(category) if category is not None else existing.category,
            date=Timestamp(new_date),
        )
        if not update_expense(updated, db_path):
            fail(f"Expense {expense_id} not found")

        console.print("[green]✓[/green] Expense updated:")
        print_expense(updated)

    except sqlite3.Error as e:
        fail(f"Database error: {e}", e)


def delete_command(expense_id: int, yes: bool = False) -> None:
    """Delete one expense."""
    db_path = require_database()

    try:
        expense = get_expense_by_id(expense_id, db_path)
        if expense is None:
            fail(f"Expense {expense_id} not found")

        print_expense(expense)
        if not yes:
            typer.confirm("Delete this expense?", default=False, abort=True)

        delete_expense(expense_id, db_path)
        console.print(f"[green]✓[/green] Expense {expense_id} deleted")

    except sqlite3.Error as e:
        fail(f"Database error: {e}", e)


def show_command(expense_id: int) -> None:
    """Show one expense."""
    db_path = require_database()

    try:
        expense = get_expense_by_id(expense_id, db_path)
    except sqlite3.Error as e:
        fail(f"Database error: {e}", e)

    if expense is None:
        fail(f"Expense {expense_id} not found")

    print_expense(expense)


def fetch_expenses(
    category: CategoryName | None,
    start: Timestamp | None,
    end: Timestamp | None,
    db_path: Path,
) -> list[Expense]:
    """Fetch a snapshot of expenses, newest first, for a category and/or period."""
    if category:
        expenses = get_expenses_by_category(category, db_path)
        if start is not None and end is not None:
            expenses = filter_by_date_range(expenses, start, end)
        return expenses

    if start is not None and end is not None:
        return get_expenses_by_date_range(start, end, db_path)

    return get_all_expenses(db_path)


def list_command(
    limit: int = 50,
    all: bool = False,
    category: str | None = None,
    this_month: bool = False,
    month: str | None = None,
) -> None:
    """List expenses."""
    db_path = require_database()

    try:
        start, end, period = compute_period(this_month, month)
    except ValueError as e:
        fail(f"Invalid month: {e}", e)

    category_name = normalize_category(category) if category else None

    try:
        expenses = fetch_expenses(category_name, start, end, db_path)
    except sqlite3.Error as e:
        fail(f"Database error: {e}", e)

    if not expenses:
        console.print("[yellow]No expenses found[/yellow]")
        return

    shown = expenses if all else expenses[:limit]

    title = f"Expenses - {period}"
    if category_name:
        title += f" - {category_name}"
    title += f" (showing {len(shown)} of {len(expenses)})"

    date_format = get_setting("date_format")
    symbol = get_setting("currency_symbol")
    table = Table(title=escape(title))
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right", style="red")

    for expense in shown:
        table.add_row(
            str(expense.id),
            format_date(expense.date, date_format),
            escape(expense.description),
            escape(expense.category),
            format_currency(expense.amount, symbol),
        )

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {money(compute_total(expenses))}")
