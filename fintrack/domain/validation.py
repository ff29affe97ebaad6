"""Pure functions for validating user input.

This module contains the functional core for field validation:
- No I/O operations (no database, no console, no files)
- No side effects
- Every rule is a named regular expression plus a few non-regex checks
- Nothing raises; every validator returns a structured result

Validators accept the raw string the user typed, before any conversion.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from fintrack.dates import allowed_date_window, date_key

# Starts and ends with a visible character, one line only
DESCRIPTION_PATTERN = re.compile(r"^\S(?:.*\S)?$")

# Two or more whitespace characters in a row
DOUBLE_SPACE_PATTERN = re.compile(r"\s{2,}")

# The same word twice in a row: "lunch lunch", "Lunch LUNCH"
DUPLICATE_WORD_PATTERN = re.compile(r"\b(\w+)\s+\1\b", re.IGNORECASE)

# "12", "12.50", "0.99"; not "012", "12.5", "-5"
AMOUNT_PATTERN = re.compile(r"^(0|[1-9]\d*)(\.\d{2})?$")

# YYYY-MM-DD with month 01-12 and day 01-31
DATE_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")

# "Food", "Books-Stationery", "Eating Out"; not "Food123", " Food", "Food-"
CATEGORY_PATTERN = re.compile(r"^[A-Za-z]+(?:[ -][A-Za-z]+)*$")

# Like AMOUNT_PATTERN but at least 1 and no lone zero
BUDGET_CAP_PATTERN = re.compile(r"^[1-9]\d*(\.\d{2})?$")

# Exchange rate multiplier, any number of decimals
CURRENCY_RATE_PATTERN = re.compile(r"^(0|[1-9]\d*)(\.\d+)?$")

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")

DESCRIPTION_MIN_LENGTH = 3
DESCRIPTION_MAX_LENGTH = 100
AMOUNT_MAX = Decimal("999999")
BUDGET_CAP_MIN = Decimal("1")
BUDGET_CAP_MAX = Decimal("1000000")


@dataclass(frozen=True)
class FieldResult:
    """Immutable result of validating a single field."""

    is_valid: bool
    error: str = ""


@dataclass(frozen=True)
class ValidationResult:
    """Immutable result of validating a whole transaction."""

    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)


VALID = FieldResult(is_valid=True)


def _invalid(error: str) -> FieldResult:
    return FieldResult(is_valid=False, error=error)


def validate_description(value: str | None) -> FieldResult:
    """Validate a transaction description.

    Args:
        value: Raw description.

    Returns:
        FieldResult with the first failing rule's message.
    """
    if not value or not value.strip():
        return _invalid("Description is required")

    if value != value.strip():
        return _invalid("Description cannot have leading or trailing spaces")

    if not DESCRIPTION_PATTERN.fullmatch(value):
        return _invalid("Description must be a single line")

    if DOUBLE_SPACE_PATTERN.search(value):
        return _invalid("Description cannot have double spaces")

    if DUPLICATE_WORD_PATTERN.search(value):
        return _invalid("Description has duplicate words")

    if len(value) < DESCRIPTION_MIN_LENGTH:
        return _invalid(f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters")

    if len(value) > DESCRIPTION_MAX_LENGTH:
        return _invalid(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters")

    return VALID


def validate_amount(value: str | None) -> FieldResult:
    """Validate a transaction amount.

    Args:
        value: Raw amount, e.g. "12.50".

    Returns:
        FieldResult with the first failing rule's message.
    """
    if not value or not value.strip():
        return _invalid("Amount is required")

    if not AMOUNT_PATTERN.fullmatch(value):
        return _invalid("Amount must be a valid number (e.g., 12.50)")

    amount = Decimal(value)
    if amount > AMOUNT_MAX:
        return _invalid("Amount is too large")

    if amount == 0:
        return _invalid("Amount must be greater than 0")

    return VALID


def validate_date(value: str | None, today: date | None = None) -> FieldResult:
    """Validate a transaction date.

    Args:
        value: Raw date in YYYY-MM-DD format.
        today: Reference date for the allowed window. Defaults to the current date.

    Returns:
        FieldResult with the first failing rule's message.
    """
    if not value or not value.strip():
        return _invalid("Date is required")

    if not DATE_PATTERN.fullmatch(value):
        return _invalid("Date must be in YYYY-MM-DD format")

    earliest, latest = allowed_date_window(today or date.today())
    key = date_key(value)

    if key > (latest.year, latest.month, latest.day):
        return _invalid("Date cannot be more than 1 year in the future")

    if key < (earliest.year, earliest.month, earliest.day):
        return _invalid("Date cannot be more than 10 years in the past")

    return VALID


def validate_category(value: str | None) -> FieldResult:
    """Validate a category name."""
    if not value or not value.strip():
        return _invalid("Category is required")

    if not CATEGORY_PATTERN.fullmatch(value):
        return _invalid("Category can only contain letters, spaces, and hyphens")

    return VALID


def validate_budget_cap(value: str | None) -> FieldResult:
    """Validate a budget cap, e.g. "500.00"."""
    if not value or not value.strip():
        return _invalid("Budget cap is required")

    if not BUDGET_CAP_PATTERN.fullmatch(value):
        return _invalid("Budget cap must be a positive number (e.g., 500.00)")

    amount = Decimal(value)
    if amount < BUDGET_CAP_MIN:
        return _invalid("Budget cap must be at least 1")

    if amount > BUDGET_CAP_MAX:
        return _invalid("Budget cap is too large")

    return VALID


def validate_currency_code(value: str | None) -> FieldResult:
    if not value or not CURRENCY_CODE_PATTERN.fullmatch(value):
        return _invalid("Currency code must be three capital letters (e.g., EUR)")
    return VALID


def validate_currency_rate(value: str | None) -> FieldResult:
    """Validate an exchange rate multiplier, e.g. "0.85" or "1300"."""
    if not value or not value.strip():
        return _invalid("Exchange rate is required")

    if not CURRENCY_RATE_PATTERN.fullmatch(value):
        return _invalid("Exchange rate must be a positive number (e.g., 0.85)")

    if Decimal(value) == 0:
        return _invalid("Exchange rate must be greater than 0")

    return VALID


def validate_transaction(fields: Mapping[str, str | None], today: date | None = None) -> ValidationResult:
    """Validate all transaction fields at once.

    Args:
        fields: Mapping with description, amount, category and date.
        today: Reference date for the date window.

    Returns:
        ValidationResult whose errors map field name to message (absent key = valid).
    """
    results = {
        "description": validate_description(fields.get("description")),
        "amount": validate_amount(fields.get("amount")),
        "category": validate_category(fields.get("category")),
        "date": validate_date(fields.get("date"), today),
    }
    errors = {name: result.error for name, result in results.items() if not result.is_valid}
    return ValidationResult(is_valid=not errors, errors=errors)
