"""Settings commands: budget cap, currency rates and configuration."""

import sys

from rich.table import Table

from fintrack.commands.common import console, format_money, open_stores, print_validation_errors
from fintrack.config import DEFAULT_CONFIG, get_config_path, load_config, set_config_value
from fintrack.domain.search import SORT_KEYS
from fintrack.exceptions import SettingsValidationError, StorageError

CONFIG_KEYS = (*DEFAULT_CONFIG, "db_path")


def parse_rate_assignments(assignments: list[str]) -> dict[str, str]:
    """Parse CODE=RATE pairs, e.g. ["EUR=0.85", "rwf=1350"].

    Args:
        assignments: Raw assignments from the command line.

    Returns:
        Mapping of upper-cased currency code to raw rate.

    Raises:
        ValueError: If an assignment has no "=".
    """
    rates: dict[str, str] = {}
    for assignment in assignments:
        code, sep, rate = assignment.partition("=")
        if not sep:
            raise ValueError(f"Expected CODE=RATE, got '{assignment}'")
        rates[code.strip().upper()] = rate.strip()
    return rates


def budget_command(set_cap: str | None = None, reset: bool = False) -> None:
    """Show, set or reset the budget cap."""
    config = load_config()
    _, settings_store = open_stores(config)
    symbol = config["currency_symbol"]

    if reset:
        try:
            settings = settings_store.reset()
        except StorageError as e:
            console.print(f"[red]Error: {e}[/red]", style="bold")
            sys.exit(1)
        console.print(f"[green]✓[/green] Settings reset. Budget cap is {format_money(settings.budget_cap, symbol)}")
        return

    if set_cap is None:
        console.print(f"[bold]Budget cap:[/bold] {format_money(settings_store.get().budget_cap, symbol)}")
        return

    try:
        settings = settings_store.update_budget_cap(set_cap)
    except SettingsValidationError as e:
        print_validation_errors(e)
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Budget cap updated to {format_money(settings.budget_cap, symbol)}")


def rates_command(assignments: list[str] | None = None) -> None:
    """Show or update the currency rate table.

    Rates are stored for reference only; amounts are never converted.
    """
    _, settings_store = open_stores()

    if assignments:
        try:
            settings_store.update_currencies(parse_rate_assignments(assignments))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)
        except SettingsValidationError as e:
            print_validation_errors(e)
            sys.exit(1)
        except StorageError as e:
            console.print(f"[red]Error: {e}[/red]", style="bold")
            sys.exit(1)
        console.print("[green]✓[/green] Currency rates updated")

    table = Table(title="Currency rates")
    table.add_column("Currency", style="cyan")
    table.add_column("Rate", justify="right")
    for code, rate in settings_store.get().currencies.items():
        table.add_row(code, f"{rate:g}")
    console.print(table)


def config_command(assignments: list[str] | None = None) -> None:
    """Show or update configuration values (KEY=VALUE)."""
    if assignments:
        for assignment in assignments:
            key, sep, value = assignment.partition("=")
            key, value = key.strip(), value.strip()
            if not sep or key not in CONFIG_KEYS:
                console.print(f"[red]Unknown setting '{key}'[/red]")
                console.print(f"[dim]Known settings: {', '.join(CONFIG_KEYS)}[/dim]")
                sys.exit(1)
            if key == "default_sort" and value not in SORT_KEYS:
                console.print(f"[red]Invalid sort '{value}'[/red] [dim]Valid sorts: {', '.join(SORT_KEYS)}[/dim]")
                sys.exit(1)
            set_config_value(key, value)
            console.print(f"[green]✓[/green] {key} = {value}")
        return

    config = load_config()
    table = Table(title=f"Configuration ({get_config_path()})")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in config.items():
        table.add_row(key, str(value))
    console.print(table)
