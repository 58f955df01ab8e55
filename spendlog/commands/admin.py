"""Admin commands for initializing and clearing the expense database."""

import sqlite3
import sys
from pathlib import Path

import typer

from spendlog.commands.common import console, fail, money, require_database
from spendlog.config import create_default_config, get_config_path
from spendlog.store.queries import delete_all_expenses, get_total_expenses
from spendlog.store.schema import get_db_path, init_database


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize spendlog database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'spendlog init --force' to overwrite[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        fail(f"Database error: {e}", e)
    except OSError as e:
        fail(f"Filesystem error: {e}", e)


def clear_command(yes: bool = False) -> None:
    """Delete every expense."""
    db_path = require_database()

    try:
        if not yes:
            total = get_total_expenses(db_path)
            console.print(f"[yellow]This removes every expense (total {money(total)}).[/yellow]")
            typer.confirm("Delete all expenses?", default=False, abort=True)

        count = delete_all_expenses(db_path)
        console.print(f"[green]✓[/green] Deleted {count} expenses")

    except sqlite3.Error as e:
        fail(f"Database error: {e}", e)
