"""Pure functions for dashboard statistics and budget utilization.

This module contains the functional core for reporting:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in cents (Money type). Amounts are summed as-is;
the aggregator does not split income from expenses.
"""

from dataclasses import dataclass
from datetime import date

from fintrack.dates import date_key, safe_date_key, trailing_window
from fintrack.domain.models import CategoryName, Money, Transaction

NO_CATEGORY = "None"
TRAILING_DAYS = 7
WARNING_PERCENT = 80.0
EXCEEDED_PERCENT = 100.0


@dataclass(frozen=True)
class BudgetUsage:
    """Immutable budget utilization.

    percent_used is clamped to 100 for display; raw_percent_used is not.
    remaining may be negative when the cap is exceeded.
    """

    cap: Money
    remaining: Money
    percent_used: float
    raw_percent_used: float


@dataclass(frozen=True)
class Stats:
    """Immutable statistics snapshot."""

    total_count: int
    total_spent: Money
    category_totals: dict[CategoryName, Money]
    top_category: str
    last_7_days: Money
    budget: BudgetUsage


def calculate_category_totals(transactions: list[Transaction]) -> dict[CategoryName, Money]:
    """Sum amounts per category.

    Args:
        transactions: Transactions to aggregate.

    Returns:
        Dictionary of category to total, in first-seen category order.
    """
    totals: dict[CategoryName, Money] = {}
    for txn in transactions:
        totals[txn.category] = Money(totals.get(txn.category, 0) + txn.amount)
    return totals


def find_top_category(category_totals: dict[CategoryName, Money]) -> str:
    """Find the category with the highest total.

    Args:
        category_totals: Category totals in first-seen order.

    Returns:
        Category name, the earliest one on ties, or "None" if there are no categories.
    """
    top: str = NO_CATEGORY
    top_amount: Money | None = None
    for category, amount in category_totals.items():
        if top_amount is None or amount > top_amount:
            top = category
            top_amount = amount
    return top


def calculate_trailing_spend(transactions: list[Transaction], today: date, days: int = TRAILING_DAYS) -> Money:
    """Sum amounts dated within the last `days` calendar days, today included.

    Args:
        transactions: Transactions to aggregate.
        today: Last day of the window.
        days: Window length.

    Returns:
        Total in cents. Future-dated transactions are not counted.
    """
    since, until = trailing_window(today, days)
    since_key, until_key = date_key(since), date_key(until)
    return Money(sum(t.amount for t in transactions if since_key <= safe_date_key(t.date) <= until_key))


def calculate_budget_usage(total_spent: Money, cap: Money) -> BudgetUsage:
    """Calculate remaining budget and percentage used.

    Args:
        total_spent: Sum of all amounts in cents.
        cap: Budget cap in cents.

    Returns:
        BudgetUsage. Percentages are 0 when nothing has been spent.
    """
    raw_percent = 0.0
    if total_spent > 0 and cap > 0:
        raw_percent = total_spent * 100 / cap

    return BudgetUsage(
        cap=cap,
        remaining=Money(cap - total_spent),
        percent_used=min(raw_percent, EXCEEDED_PERCENT),
        raw_percent_used=raw_percent,
    )


def compute_stats(transactions: list[Transaction], budget_cap: Money, today: date | None = None) -> Stats:
    """Compute the full statistics snapshot.

    Args:
        transactions: All stored transactions.
        budget_cap: Budget cap in cents.
        today: Reference date for the trailing window. Defaults to the current date.

    Returns:
        Stats with totals, category breakdown, top category, trailing spend and budget usage.
    """
    today = today or date.today()
    total_spent = Money(sum(t.amount for t in transactions))
    category_totals = calculate_category_totals(transactions)

    return Stats(
        total_count=len(transactions),
        total_spent=total_spent,
        category_totals=category_totals,
        top_category=find_top_category(category_totals),
        last_7_days=calculate_trailing_spend(transactions, today),
        budget=calculate_budget_usage(total_spent, budget_cap),
    )


def budget_alert_level(percent_used: float) -> str:
    """Classify budget usage.

    Args:
        percent_used: Percentage of the cap used.

    Returns:
        "exceeded" at 100% or more, "warning" at 80% or more, otherwise "ok".
    """
    if percent_used >= EXCEEDED_PERCENT:
        return "exceeded"
    elif percent_used >= WARNING_PERCENT:
        return "warning"
    return "ok"


def sorted_category_totals(category_totals: dict[CategoryName, Money]) -> list[tuple[CategoryName, Money]]:
    """Order categories by total, highest first. Ties keep first-seen order."""
    return sorted(category_totals.items(), key=lambda x: x[1], reverse=True)


def recent_transactions(transactions: list[Transaction], limit: int = 5) -> list[Transaction]:
    """Return the newest transactions by date."""
    return sorted(transactions, key=lambda t: safe_date_key(t.date), reverse=True)[:limit]
