"""Pure functions for regex search, sorting and match highlighting.

This module contains the functional core for querying transactions:
- No I/O operations (no database, no console, no files)
- No side effects; inputs are never mutated
- Invalid patterns degrade to "show all" instead of raising
"""

import re
from dataclasses import dataclass

from fintrack.dates import safe_date_key
from fintrack.domain.models import Transaction, format_money_plain
from fintrack.exceptions import InvalidPatternError

INVALID_PATTERN_MESSAGE = "Invalid regex pattern. Check your syntax."

DEFAULT_SORT = "date-desc"

SORT_KEYS = (
    "date-desc",
    "date-asc",
    "amount-desc",
    "amount-asc",
    "description-asc",
    "description-desc",
)


@dataclass(frozen=True)
class SearchResult:
    """Immutable search result.

    When the pattern is invalid, matches holds the full input and error is set.
    """

    matches: list[Transaction]
    error: str | None = None


@dataclass(frozen=True)
class SearchExample:
    """Example search pattern shown in help output."""

    pattern: str
    description: str
    example: str


SEARCH_EXAMPLES: tuple[SearchExample, ...] = (
    SearchExample("coffee", 'Find any transaction containing "coffee"', 'Matches: "Coffee with friends", "coffee beans"'),
    SearchExample("coffee|tea", 'Find transactions with "coffee" OR "tea"', 'Matches: "Coffee break", "Green tea"'),
    SearchExample(r"\.\d\b", "Find amounts with cents", 'Matches: "12.5", "8.75" but not "45"'),
    SearchExample(r"^\d+$", "Find whole number amounts (no cents)", 'Matches: "12", "45" but not "12.5"'),
    SearchExample("^[A-Z]", "Find descriptions starting with an uppercase letter", 'Matches: "Lunch" but not "lunch"'),
    SearchExample("2025-09", "Find all transactions from September 2025", 'Matches any date like "2025-09-29"'),
    SearchExample("(Food|Books)", "Find Food or Books categories", 'Matches category "Food" or "Books"'),
)


def compile_pattern(pattern: str | None, case_sensitive: bool = False) -> re.Pattern[str] | None:
    """Compile a user-supplied search pattern.

    Args:
        pattern: Regular expression typed by the user.
        case_sensitive: Whether matching respects case.

    Returns:
        Compiled pattern, or None if the pattern is empty.

    Raises:
        InvalidPatternError: If the pattern is not a valid regular expression.
    """
    if not pattern or not pattern.strip():
        return None

    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidPatternError(f"{INVALID_PATTERN_MESSAGE} ({e})") from e


def searchable_fields(transaction: Transaction) -> tuple[str, str, str, str]:
    """Return the texts a search pattern is tested against."""
    return (
        transaction.description,
        format_money_plain(transaction.amount),
        transaction.category,
        transaction.date,
    )


def matches_transaction(transaction: Transaction, regex: re.Pattern[str]) -> bool:
    """Check whether any searchable field of a transaction matches.

    Args:
        transaction: Transaction to test.
        regex: Compiled search pattern.

    Returns:
        True if description, amount, category or date matches.
    """
    return any(regex.search(text) for text in searchable_fields(transaction))


def search_transactions(
    transactions: list[Transaction],
    pattern: str | None,
    case_sensitive: bool = False,
) -> SearchResult:
    """Filter transactions by a regex pattern.

    Args:
        transactions: Transactions to search.
        pattern: Regular expression typed by the user. Empty shows all.
        case_sensitive: Whether matching respects case.

    Returns:
        SearchResult with matching transactions in input order. An invalid
        pattern yields every transaction plus an error message.
    """
    try:
        regex = compile_pattern(pattern, case_sensitive)
    except InvalidPatternError:
        return SearchResult(matches=list(transactions), error=INVALID_PATTERN_MESSAGE)

    if regex is None:
        return SearchResult(matches=list(transactions))

    return SearchResult(matches=[t for t in transactions if matches_transaction(t, regex)])


def sort_transactions(transactions: list[Transaction], sort_by: str = DEFAULT_SORT) -> list[Transaction]:
    """Sort transactions without modifying the input.

    Dates are compared as (year, month, day) values. For valid YYYY-MM-DD
    strings this is the same order as plain string comparison.

    Args:
        transactions: Transactions to sort.
        sort_by: One of SORT_KEYS. Unknown keys fall back to "date-desc".

    Returns:
        New sorted list. Ties keep their original relative order.
    """
    if sort_by == "date-asc":
        return sorted(transactions, key=lambda t: safe_date_key(t.date))
    if sort_by == "amount-desc":
        return sorted(transactions, key=lambda t: t.amount, reverse=True)
    if sort_by == "amount-asc":
        return sorted(transactions, key=lambda t: t.amount)
    if sort_by == "description-asc":
        return sorted(transactions, key=lambda t: (t.description.casefold(), t.description))
    if sort_by == "description-desc":
        return sorted(transactions, key=lambda t: (t.description.casefold(), t.description), reverse=True)
    return sorted(transactions, key=lambda t: safe_date_key(t.date), reverse=True)


def highlight_spans(
    text: str,
    pattern: str | re.Pattern[str] | None,
    case_sensitive: bool = False,
) -> list[tuple[int, int]]:
    """Find the (start, end) spans of every non-overlapping, non-empty match.

    Args:
        text: Text to scan.
        pattern: Pattern string or compiled pattern.
        case_sensitive: Only used when pattern is a string.

    Returns:
        List of spans; empty if the pattern is absent or invalid.
    """
    if not text or pattern is None:
        return []

    if isinstance(pattern, str):
        try:
            regex = compile_pattern(pattern, case_sensitive)
        except InvalidPatternError:
            return []
        if regex is None:
            return []
    else:
        regex = pattern

    return [match.span() for match in regex.finditer(text) if match.end() > match.start()]


def highlight(
    text: str,
    pattern: str | re.Pattern[str] | None,
    case_sensitive: bool = False,
    marker: tuple[str, str] = ("<mark>", "</mark>"),
) -> str:
    """Wrap every match of a pattern in markers.

    Args:
        text: Text to highlight.
        pattern: Pattern string or compiled pattern.
        case_sensitive: Only used when pattern is a string.
        marker: Opening and closing marker strings.

    Returns:
        Highlighted text, or the original text if the pattern is absent or invalid.
    """
    spans = highlight_spans(text, pattern, case_sensitive)
    if not spans:
        return text

    opening, closing = marker
    parts: list[str] = []
    position = 0
    for start, end in spans:
        parts.append(text[position:start])
        parts.append(f"{opening}{text[start:end]}{closing}")
        position = end
    parts.append(text[position:])
    return "".join(parts)
