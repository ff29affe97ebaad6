"""Shared helpers for CLI commands."""

import sys
from pathlib import Path
from typing import Any

from rich.console import Console

from fintrack.config import load_config
from fintrack.domain.models import Money
from fintrack.exceptions import StorageError, ValidationError
from fintrack.store.records import TransactionStore
from fintrack.store.settings import SettingsStore
from fintrack.store.storage import SqliteStorage, database_exists, get_db_path

console = Console()


def resolve_db_path(config: dict[str, Any] | None = None) -> Path:
    """Get the database path, honouring a db_path override in the config."""
    if config is None:
        config = load_config()
    override = config.get("db_path")
    if override:
        return Path(override).expanduser()
    return get_db_path()


def require_database(db_path: Path) -> None:
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'fintrack init' first.[/red]", style="bold")
        sys.exit(1)


def open_stores(config: dict[str, Any] | None = None) -> tuple[TransactionStore, SettingsStore]:
    """Open the transaction and settings stores over the configured database.

    Exits with an error message if the database is missing or unreadable.
    """
    db_path = resolve_db_path(config)
    require_database(db_path)

    try:
        storage = SqliteStorage(db_path)
        return TransactionStore(storage), SettingsStore(storage)
    except StorageError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)


def format_money(amount: Money, symbol: str = "$") -> str:
    """Format cents for display, e.g. "$1,234.50" or "-$4.50"."""
    formatted = f"{symbol}{abs(amount) / 100:,.2f}"
    return f"-{formatted}" if amount < 0 else formatted


def print_validation_errors(error: ValidationError) -> None:
    console.print("[red]Validation failed:[/red]", style="bold")
    for name, message in error.errors.items():
        console.print(f"  [red]{name}[/red]: {message}")
