"""List, search and stats commands for viewing transaction data."""

import re

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fintrack.commands.common import console, format_money, open_stores
from fintrack.config import load_config
from fintrack.domain.models import Transaction
from fintrack.domain.search import (
    SEARCH_EXAMPLES,
    SORT_KEYS,
    compile_pattern,
    highlight_spans,
    search_transactions,
    sort_transactions,
)
from fintrack.domain.stats import (
    budget_alert_level,
    compute_stats,
    recent_transactions,
    sorted_category_totals,
)
from fintrack.logging_setup import get_logger

logger = get_logger(__name__)

HIGHLIGHT_STYLE = "black on yellow"

ALERT_MESSAGES = {
    "exceeded": "[red][bold]⚠ Budget Exceeded![/bold] You have spent more than your budget cap.[/red]",
    "warning": "[yellow][bold]Warning:[/bold] You are approaching your budget limit![/yellow]",
    "ok": "[green]You're doing great! Keep tracking your expenses.[/green]",
}


def highlighted(text: str, spans: list[tuple[int, int]]) -> Text:
    """Build a rich Text with the given spans highlighted."""
    result = Text(text)
    for start, end in spans:
        result.stylize(HIGHLIGHT_STYLE, start, end)
    return result


def build_transactions_table(
    title: str, transactions: list[Transaction], symbol: str, pattern: re.Pattern[str] | None = None
) -> Table:
    """Build a table of transactions, highlighting matches of pattern if given."""
    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("ID", style="dim")

    for txn in transactions:
        table.add_row(
            highlighted(txn.date, highlight_spans(txn.date, pattern)),
            highlighted(txn.description, highlight_spans(txn.description, pattern)),
            format_money(txn.amount, symbol),
            highlighted(txn.category, highlight_spans(txn.category, pattern)),
            txn.id,
        )
    return table


def check_sort_key(sort_by: str) -> None:
    if sort_by not in SORT_KEYS:
        console.print(f"[yellow]Unknown sort '{sort_by}', using date-desc[/yellow]")
        console.print(f"[dim]Valid sorts: {', '.join(SORT_KEYS)}[/dim]")


def list_command(sort_by: str | None = None, limit: int = 50, all: bool = False) -> None:
    """List transactions."""
    config = load_config()
    transactions, _ = open_stores(config)

    sort_by = sort_by or config["default_sort"]
    check_sort_key(sort_by)

    ordered = sort_transactions(transactions.list(), sort_by)
    if not ordered:
        console.print("[yellow]No transactions yet. Start adding some![/yellow]")
        return

    shown = ordered if all else ordered[:limit]
    title = f"Transactions (showing all {len(shown)})" if all else f"Transactions (showing {len(shown)} of {len(ordered)})"
    console.print(build_transactions_table(title, shown, config["currency_symbol"]))


def search_command(pattern: str, case_sensitive: bool = False, sort_by: str | None = None) -> None:
    """Search transactions by regex and highlight matches."""
    config = load_config()
    transactions, _ = open_stores(config)

    sort_by = sort_by or config["default_sort"]
    check_sort_key(sort_by)

    result = search_transactions(transactions.list(), pattern, case_sensitive)
    regex = None
    if result.error:
        logger.warning("Invalid search pattern: %r", pattern)
        console.print(f"[red]{result.error}[/red] [dim]Showing all transactions.[/dim]")
    else:
        regex = compile_pattern(pattern, case_sensitive)

    matches = sort_transactions(result.matches, sort_by)
    if not matches:
        console.print(f"[yellow]No transactions match '{escape(pattern)}'[/yellow]")
        return

    title = f"Search: {escape(pattern)} ({len(matches)} match{'es' if len(matches) != 1 else ''})"
    console.print(build_transactions_table(title, matches, config["currency_symbol"], regex))


def examples_command() -> None:
    """Show example search patterns."""
    table = Table(title="Search pattern examples")
    table.add_column("Pattern", style="cyan")
    table.add_column("Finds", style="white")
    table.add_column("Example", style="dim")

    for example in SEARCH_EXAMPLES:
        table.add_row(example.pattern, example.description, example.example)

    console.print(table)


def stats_command(recent: int = 5) -> None:
    """Show the dashboard: totals, budget, category breakdown and recent transactions."""
    config = load_config()
    transactions, settings_store = open_stores(config)
    symbol = config["currency_symbol"]

    records = transactions.list()
    stats = compute_stats(records, settings_store.get().budget_cap)
    budget = stats.budget

    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="bold")
    summary.add_column(justify="right")
    summary.add_row("Total transactions", str(stats.total_count))
    summary.add_row("Total spent", format_money(stats.total_spent, symbol))
    summary.add_row("Top category", stats.top_category)
    summary.add_row("Last 7 days", format_money(stats.last_7_days, symbol))
    console.print(Panel(summary, title="Dashboard", expand=False))

    if budget.remaining < 0:
        remaining_style = "red"
    elif budget.remaining < budget.cap * 0.2:
        remaining_style = "yellow"
    else:
        remaining_style = "green"

    console.print(f"[bold]Budget cap:[/bold] {format_money(budget.cap, symbol)}")
    console.print(
        f"[bold]Remaining:[/bold] [{remaining_style}]{format_money(budget.remaining, symbol)}[/{remaining_style}]"
    )
    bar_width = 40
    filled = int(budget.percent_used / 100 * bar_width)
    console.print(f"[bold]Used:[/bold] {'█' * filled}{'░' * (bar_width - filled)} {budget.percent_used:.0f}%")
    console.print(ALERT_MESSAGES[budget_alert_level(budget.percent_used)])

    if not stats.category_totals:
        console.print("\n[dim]No transactions yet. Start adding some![/dim]")
        return

    breakdown = Table(title="By category")
    breakdown.add_column("Category", style="magenta")
    breakdown.add_column("Amount", justify="right")
    for category, amount in sorted_category_totals(stats.category_totals):
        breakdown.add_row(category, format_money(amount, symbol))
    console.print(breakdown)

    if recent > 0:
        console.print(build_transactions_table("Recent", recent_transactions(records, recent), symbol))

