"""CLI entry point for fintrack."""

import logging
import os

import typer

from fintrack.commands.admin import backup_command, clear_command, export_command, import_command, init_command
from fintrack.commands.report import examples_command, list_command, search_command, stats_command
from fintrack.commands.settings import budget_command, config_command, rates_command
from fintrack.commands.transactions import add_command, delete_command, edit_command
from fintrack.config import load_config
from fintrack.logging_setup import LOG_LEVEL_ENV, configure_logging

app = typer.Typer(
    name="fintrack",
    help="fintrack - Track your spending against a budget",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log store activity to stderr"),
) -> None:
    """fintrack - Track your spending against a budget."""
    if verbose:
        configure_logging(logging.INFO)
    elif os.environ.get(LOG_LEVEL_ENV):
        configure_logging(None)
    else:
        configure_logging(load_config().get("log_level"))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize fintrack database and configuration."""
    init_command(force)


@app.command()
def add(
    description: str,
    amount: str = typer.Argument(..., help="Amount, e.g. 12.50"),
    category: str = typer.Argument(..., help="Category, e.g. Food or Books-Stationery"),
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"),
) -> None:
    """Add a transaction."""
    add_command(description, amount, category, date)


@app.command()
def edit(
    txn_id: str = typer.Argument(..., metavar="ID", help="Transaction ID (from 'fintrack list')"),
    description: str = typer.Option(None, "--description", help="New description"),
    amount: str = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", help="New category"),
    date: str = typer.Option(None, "--date", help="New date (YYYY-MM-DD)"),
) -> None:
    """Edit a transaction."""
    edit_command(txn_id, description, amount, category, date)


@app.command()
def delete(
    txn_id: str = typer.Argument(..., metavar="ID", help="Transaction ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(txn_id, yes)


@app.command(name="list")
def list_transactions(
    sort: str = typer.Option(None, "--sort", "-s", help="date-desc, date-asc, amount-desc, amount-asc, description-asc, description-desc"),
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions."""
    list_command(sort, limit, all)


@app.command()
def search(
    pattern: str = typer.Argument(..., help="Regular expression, e.g. 'coffee|tea'"),
    case_sensitive: bool = typer.Option(False, "--case-sensitive", "-c", help="Match case exactly"),
    sort: str = typer.Option(None, "--sort", "-s", help="Sort order for the results"),
) -> None:
    """Search your transactions with a regular expression."""
    search_command(pattern, case_sensitive, sort)


@app.command()
def examples() -> None:
    """Show example search patterns."""
    examples_command()


@app.command()
def stats(
    recent: int = typer.Option(5, "--recent", help="Number of recent transactions to show"),
) -> None:
    """Show your spending dashboard and budget status."""
    stats_command(recent)


@app.command()
def budget(
    set_cap: str = typer.Option(None, "--set", help="New budget cap, e.g. 750.00"),
    reset: bool = typer.Option(False, "--reset", help="Restore the default budget cap and currency rates"),
) -> None:
    """Show or set your budget cap."""
    budget_command(set_cap, reset)


@app.command()
def rates(
    assignments: list[str] = typer.Argument(None, metavar="[CODE=RATE]...", help="Rates to set, e.g. EUR=0.85"),
) -> None:
    """Show or update currency exchange rates (stored for reference)."""
    rates_command(assignments)


@app.command(name="config")
def config(
    assignments: list[str] = typer.Argument(None, metavar="[KEY=VALUE]...", help="Settings to change"),
) -> None:
    """Show or update configuration."""
    config_command(assignments)


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: transactions_<date>.json)"),
    file_format: str = typer.Option("json", "--format", help="json or csv"),
) -> None:
    """Export your transactions to a file."""
    export_command(output, file_format)


@app.command(name="import")
def import_transactions(
    file: str = typer.Argument(..., help="JSON file previously exported"),
    merge: bool = typer.Option(False, "--merge", help="Add to existing transactions instead of replacing them"),
) -> None:
    """Import transactions from a JSON file."""
    import_command(file, merge)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete all your transactions."""
    clear_command(yes)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


if __name__ == "__main__":
    app()
