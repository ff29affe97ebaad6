"""Admin commands for init, backup, import, export and clearing data."""

import shutil
import sys
from datetime import datetime
from pathlib import Path

import typer

from fintrack.commands.common import console, open_stores, resolve_db_path
from fintrack.config import create_default_config, get_config_path, load_config
from fintrack.exceptions import MalformedImportError, StorageError
from fintrack.store.storage import init_database
from fintrack.store.transfer import default_export_filename, export_to_csv, export_to_json, read_import_file


def init_command(force: bool = False) -> None:
    """Initialize fintrack database and configuration."""
    config_path = get_config_path()
    config_exists = config_path.exists()
    db_path = resolve_db_path(load_config(config_path))
    db_exists = db_path.exists()

    if not force and (db_exists or config_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if db_exists:
            console.print(f"  Database already exists: {db_path}")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'fintrack init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        if force and db_exists:
            db_path.unlink()

        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")


def backup_command(output_dir: str | None = None) -> None:
    """Backup database and configuration files."""
    config_path = get_config_path()
    db_path = resolve_db_path()

    if not db_path.exists():
        console.print("[red]Database not found. Run 'fintrack init' first.[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = db_path.parent / "backups"

    backup_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    try:
        db_backup = backup_dir / f"fintrack_{timestamp}.db"
        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        if config_path.exists():
            config_backup = backup_dir / f"config_{timestamp}.toml"
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")
    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Backup complete![/green]", style="bold")


def export_command(output: str | None = None, file_format: str = "json") -> None:
    """Export all transactions to a JSON (or CSV) file."""
    if file_format not in ("json", "csv"):
        console.print(f"[red]Unknown format '{file_format}'. Use 'json' or 'csv'.[/red]")
        sys.exit(1)

    transactions, _ = open_stores()
    records = transactions.list()
    path = Path(output).expanduser() if output else Path(default_export_filename(extension=file_format))

    try:
        if file_format == "csv":
            export_to_csv(records, path)
        else:
            path.write_text(export_to_json(records) + "\n", encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(records)} transactions to {path}")


def import_command(file: str, merge: bool = False) -> None:
    """Import transactions from a JSON file, replacing (or merging with) existing ones."""
    path = Path(file).expanduser()
    transactions, _ = open_stores()

    try:
        imported = read_import_file(path)
        if merge:
            transactions.import_many(imported)
        else:
            transactions.replace_all(imported)
    except MalformedImportError as e:
        console.print(f"[red]Import rejected: {e}[/red]", style="bold")
        for position, problem in list(e.details.items())[:10]:
            if isinstance(problem, dict):
                problem = "; ".join(f"{name}: {message}" for name, message in problem.items())
            console.print(f"  [dim]#{position}[/dim] {problem}")
        console.print("[dim]Nothing was imported.[/dim]")
        sys.exit(1)
    except (OSError, StorageError) as e:
        console.print(f"[red]Import failed: {e}[/red]", style="bold")
        sys.exit(1)

    action = "Merged" if merge else "Imported"
    console.print(f"[green]✓[/green] {action} {len(imported)} transactions")


def clear_command(yes: bool = False) -> None:
    """Delete every transaction."""
    transactions, _ = open_stores()

    count = len(transactions)
    if not yes and not typer.confirm(f"Delete all {count} transactions? This cannot be undone", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        transactions.clear()
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Cleared {count} transactions")
