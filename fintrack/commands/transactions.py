"""Transaction management commands (add, edit, delete)."""

import sys
from datetime import date

import typer
from rich.markup import escape

from fintrack.commands.common import console, format_money, open_stores, print_validation_errors
from fintrack.config import load_config
from fintrack.domain.models import Transaction, TransactionInput, TransactionUpdate
from fintrack.exceptions import NotFoundError, StorageError, StoreInvariantError, TransactionValidationError


def display_transaction(txn: Transaction, symbol: str) -> None:
    console.print(f"  ID: [dim]{txn.id}[/dim]")
    console.print(f"  Date: {txn.date}")
    console.print(f"  Description: {escape(txn.description)}")
    console.print(f"  Amount: {format_money(txn.amount, symbol)}")
    console.print(f"  Category: {txn.category}")


def add_command(
    description: str,
    amount: str,
    category: str,
    txn_date: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        description: Transaction description.
        amount: Amount as typed, e.g. "12.50".
        category: Category name.
        txn_date: Date in YYYY-MM-DD format. Defaults to today.
    """
    config = load_config()
    transactions, _ = open_stores(config)

    fields = TransactionInput(
        description=description,
        amount=amount,
        category=category,
        date=txn_date or date.today().isoformat(),
    )

    try:
        txn = transactions.create(fields)
    except TransactionValidationError as e:
        print_validation_errors(e)
        sys.exit(1)
    except (StorageError, StoreInvariantError) as e:
        console.print(f"[red]Error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Transaction added:")
    display_transaction(txn, config["currency_symbol"])


def edit_command(
    txn_id: str,
    description: str | None = None,
    amount: str | None = None,
    category: str | None = None,
    txn_date: str | None = None,
) -> None:
    """Edit fields of an existing transaction.

    Args:
        txn_id: Transaction ID (from 'fintrack list').
        description: New description, or None to keep.
        amount: New amount, or None to keep.
        category: New category, or None to keep.
        txn_date: New date, or None to keep.
    """
    config = load_config()
    transactions, _ = open_stores(config)

    changes = TransactionUpdate(description=description, amount=amount, category=category, date=txn_date)
    if changes == TransactionUpdate():
        console.print("[yellow]Nothing to change. Pass at least one of --description, --amount, --category, --date[/yellow]")
        sys.exit(1)

    try:
        txn = transactions.update(txn_id, changes)
    except NotFoundError:
        console.print(f"[red]Transaction {escape(txn_id)} not found[/red]")
        sys.exit(1)
    except TransactionValidationError as e:
        print_validation_errors(e)
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Updated transaction {escape(txn_id)}:")
    display_transaction(txn, config["currency_symbol"])


def delete_command(txn_id: str, yes: bool = False) -> None:
    """Delete a transaction after confirmation.

    Args:
        txn_id: Transaction ID.
        yes: Skip the confirmation prompt.
    """
    config = load_config()
    transactions, _ = open_stores(config)

    txn = transactions.get(txn_id)
    if txn is None:
        console.print(f"[red]Transaction {escape(txn_id)} not found[/red]")
        sys.exit(1)

    display_transaction(txn, config["currency_symbol"])
    if not yes and not typer.confirm("Delete this transaction?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        removed = transactions.remove(txn_id)
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]", style="bold")
        sys.exit(1)

    if removed:
        console.print(f"[green]✓[/green] Deleted transaction {escape(txn_id)}")
    else:
        console.print(f"[red]Transaction {escape(txn_id)} not found[/red]")
        sys.exit(1)
