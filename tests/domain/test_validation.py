"""Tests for fintrack.domain.validation pure functions."""

from datetime import date

import pytest

from fintrack.domain.validation import (
    validate_amount,
    validate_budget_cap,
    validate_category,
    validate_currency_code,
    validate_currency_rate,
    validate_date,
    validate_description,
    validate_transaction,
)

TODAY = date(2025, 9, 29)


class TestValidateDescription:
    """Tests for validate_description."""

    @pytest.mark.parametrize("value", ["Coffee", "Lunch with team", "Bus", "a" * 100, "Rent - October"])
    def test_accepts_valid(self, value: str) -> None:
        """Should accept well-formed descriptions."""
        assert validate_description(value).is_valid

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_required(self, value: str | None) -> None:
        """Should reject empty descriptions."""
        result = validate_description(value)

        assert not result.is_valid
        assert result.error == "Description is required"

    def test_rejects_surrounding_spaces(self) -> None:
        """Should reject leading or trailing whitespace."""
        assert validate_description(" Coffee").error == "Description cannot have leading or trailing spaces"
        assert validate_description("Coffee ").error == "Description cannot have leading or trailing spaces"

    def test_rejects_double_space(self) -> None:
        """Should reject doubled internal whitespace."""
        result = validate_description("Lunch  today")

        assert not result.is_valid
        assert result.error == "Description cannot have double spaces"

    def test_rejects_duplicate_word(self) -> None:
        """Should reject an immediately repeated word."""
        result = validate_description("lunch lunch")

        assert not result.is_valid
        assert result.error == "Description has duplicate words"

    def test_duplicate_word_ignores_case(self) -> None:
        """Should treat words differing only in case as duplicates."""
        assert not validate_description("Lunch LUNCH").is_valid

    def test_repeated_word_apart_is_fine(self) -> None:
        """Should allow a word to repeat when not adjacent."""
        assert validate_description("tea and more tea").is_valid

    def test_rejects_multiline(self) -> None:
        """Should reject descriptions spanning lines."""
        assert validate_description("Coffee\nbeans").error == "Description must be a single line"

    def test_length_limits(self) -> None:
        """Should enforce 3 to 100 characters."""
        assert validate_description("ab").error == "Description must be at least 3 characters"
        assert validate_description("a" * 101).error == "Description must be at most 100 characters"


class TestValidateAmount:
    """Tests for validate_amount."""

    @pytest.mark.parametrize("value", ["12", "12.50", "0.99", "999999", "999999.00"])
    def test_accepts_valid(self, value: str) -> None:
        """Should accept whole numbers and two-decimal amounts."""
        assert validate_amount(value).is_valid

    def test_required(self) -> None:
        """Should reject empty amounts."""
        assert validate_amount("").error == "Amount is required"
        assert validate_amount(None).error == "Amount is required"

    @pytest.mark.parametrize("value", ["12.5", "012", "-5", "1,000", "12.505", "abc", ".50"])
    def test_rejects_malformed(self, value: str) -> None:
        """Should reject anything but plain one- or two-decimal numbers."""
        result = validate_amount(value)

        assert not result.is_valid
        assert result.error == "Amount must be a valid number (e.g., 12.50)"

    def test_rejects_zero(self) -> None:
        """Should reject a zero amount."""
        assert validate_amount("0").error == "Amount must be greater than 0"
        assert validate_amount("0.00").error == "Amount must be greater than 0"

    def test_rejects_too_large(self) -> None:
        """Should reject amounts above 999,999."""
        assert validate_amount("1000000").error == "Amount is too large"
        assert validate_amount("999999.01").error == "Amount is too large"


class TestValidateDate:
    """Tests for validate_date."""

    def test_accepts_today(self) -> None:
        """Should accept today's date."""
        assert validate_date("2025-09-29", TODAY).is_valid

    def test_required(self) -> None:
        """Should reject an empty date."""
        assert validate_date("", TODAY).error == "Date is required"

    @pytest.mark.parametrize("value", ["2025-13-01", "2025-00-10", "2025-09-32", "25-09-29", "2025/09/29"])
    def test_rejects_bad_format(self, value: str) -> None:
        """Should reject dates outside YYYY-MM-DD with valid month and day."""
        assert validate_date(value, TODAY).error == "Date must be in YYYY-MM-DD format"

    def test_window_edges_inclusive(self) -> None:
        """Should accept exactly one year ahead and ten years back."""
        assert validate_date("2026-09-29", TODAY).is_valid
        assert validate_date("2015-09-29", TODAY).is_valid

    def test_rejects_far_future(self) -> None:
        """Should reject dates more than a year ahead."""
        assert validate_date("2026-09-30", TODAY).error == "Date cannot be more than 1 year in the future"

    def test_rejects_far_past(self) -> None:
        """Should reject dates more than ten years back."""
        assert validate_date("2015-09-28", TODAY).error == "Date cannot be more than 10 years in the past"

    def test_impossible_day_within_window(self) -> None:
        """Should accept a day that fits the pattern even if the month is short."""
        assert validate_date("2025-02-31", TODAY).is_valid


class TestValidateCategory:
    """Tests for validate_category."""

    @pytest.mark.parametrize("value", ["Food", "Books-Stationery", "Eating Out"])
    def test_accepts_valid(self, value: str) -> None:
        """Should accept letters with single spaces or hyphens."""
        assert validate_category(value).is_valid

    def test_required(self) -> None:
        """Should reject an empty category."""
        assert validate_category("").error == "Category is required"

    @pytest.mark.parametrize("value", ["Food123", " Food", "Food-", "Food--Drink", "Café"])
    def test_rejects_invalid(self, value: str) -> None:
        """Should reject digits, stray separators and non-ASCII letters."""
        assert validate_category(value).error == "Category can only contain letters, spaces, and hyphens"


class TestValidateBudgetCap:
    """Tests for validate_budget_cap."""

    def test_accepts_valid(self) -> None:
        """Should accept positive amounts with optional cents."""
        assert validate_budget_cap("500").is_valid
        assert validate_budget_cap("750.00").is_valid
        assert validate_budget_cap("1000000").is_valid

    def test_required(self) -> None:
        """Should reject an empty cap."""
        assert validate_budget_cap("").error == "Budget cap is required"

    def test_rejects_malformed(self) -> None:
        """Should reject zero, negatives and one-decimal amounts."""
        assert not validate_budget_cap("0").is_valid
        assert not validate_budget_cap("-10").is_valid
        assert not validate_budget_cap("10.5").is_valid

    def test_rejects_too_large(self) -> None:
        """Should reject caps above one million."""
        assert validate_budget_cap("1000000.01").error == "Budget cap is too large"


class TestValidateCurrency:
    """Tests for validate_currency_code and validate_currency_rate."""

    def test_code(self) -> None:
        """Should accept three capital letters only."""
        assert validate_currency_code("EUR").is_valid
        assert not validate_currency_code("eur").is_valid
        assert not validate_currency_code("EURO").is_valid

    def test_rate(self) -> None:
        """Should accept positive decimal multipliers."""
        assert validate_currency_rate("0.85").is_valid
        assert validate_currency_rate("1300").is_valid
        assert validate_currency_rate("0").error == "Exchange rate must be greater than 0"
        assert not validate_currency_rate("-1").is_valid


class TestValidateTransaction:
    """Tests for validate_transaction."""

    def test_all_valid(self) -> None:
        """Should report no errors for valid fields."""
        result = validate_transaction(
            {"description": "Coffee", "amount": "4.50", "category": "Food", "date": "2025-09-29"}, TODAY
        )

        assert result.is_valid
        assert result.errors == {}

    def test_collects_every_error(self) -> None:
        """Should report one message per invalid field."""
        result = validate_transaction(
            {"description": "lunch lunch", "amount": "12.5", "category": "Food123", "date": "2025-13-01"}, TODAY
        )

        assert not result.is_valid
        assert set(result.errors) == {"description", "amount", "category", "date"}

    def test_only_invalid_fields_reported(self) -> None:
        """Should leave valid fields out of the error mapping."""
        result = validate_transaction(
            {"description": "Coffee", "amount": "0", "category": "Food", "date": "2025-09-29"}, TODAY
        )

        assert result.errors == {"amount": "Amount must be greater than 0"}

    def test_missing_fields(self) -> None:
        """Should treat missing keys as empty."""
        result = validate_transaction({}, TODAY)

        assert result.errors["description"] == "Description is required"
        assert result.errors["date"] == "Date is required"
