"""CLI entry point for spendlog."""

import typer

from spendlog.commands.admin import clear_command, init_command
from spendlog.commands.expenses import (
    add_command,
    delete_command,
    edit_command,
    list_command,
    show_command,
)
from spendlog.commands.summary import categories_command, summary_command
from spendlog.log import configure_logging

app = typer.Typer(
    name="spendlog",
    help="spendlog - Track your expenses and see where your money goes",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Write logs as JSON lines"),
) -> None:
    """spendlog - Track your expenses and see where your money goes."""
    configure_logging(verbose, json_logs)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize spendlog database and configuration."""
    init_command(force)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount spent, e.g. 25.50"),
    description: str = typer.Argument(..., help="What the money was spent on"),
    category: str = typer.Option(None, "--category", "-c", help="Category (default from config)"),
    date: str = typer.Option(None, "--date", "-d", help="Date of the expense (default: now)"),
) -> None:
    """Record a new expense."""
    add_command(amount, description, category, date)


@app.command()
def edit(
    expense_id: int = typer.Argument(..., help="Expense ID (from 'spendlog list')"),
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    description: str = typer.Option(None, "--description", help="New description"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
) -> None:
    """Edit an existing expense."""
    edit_command(expense_id, amount, description, category, date)


@app.command()
def delete(
    expense_id: int = typer.Argument(..., help="Expense ID (from 'spendlog list')"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id, yes)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete all of your expenses."""
    clear_command(yes)


@app.command()
def show(
    expense_id: int = typer.Argument(..., help="Expense ID (from 'spendlog list')"),
) -> None:
    """Show a single expense."""
    show_command(expense_id)


@app.command(name="list")
def list_expenses(
    limit: int = typer.Option(50, min=0, help="Maximum expenses to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all matching expenses"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    this_month: bool = typer.Option(False, "--this-month", help="Only the current month"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """List your expenses, newest first."""
    list_command(limit, all, category, this_month, month)


@app.command()
def summary(
    this_month: bool = typer.Option(False, "--this-month", help="Only the current month"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    sort_by: str = typer.Option("value", "--sort", help="Sort by 'value' or 'alpha'"),
    chart: bool = typer.Option(True, help="Show a bar chart of your spending"),
) -> None:
    """Show your spending statistics and category breakdown."""
    summary_command(this_month, month, sort_by, chart)


@app.command()
def categories() -> None:
    """List the suggested expense categories."""
    categories_command()


if __name__ == "__main__":
    app()
