"""Tests for fintrack.dates pure functions."""

from datetime import date

import pytest

from fintrack.dates import allowed_date_window, date_key, safe_date_key, shift_years, trailing_window


class TestDateKey:
    """Tests for date_key."""

    def test_splits_date(self) -> None:
        """Should split a date into integer parts."""
        assert date_key("2025-09-29") == (2025, 9, 29)

    def test_orders_like_calendar(self) -> None:
        """Should order dates by calendar value."""
        assert date_key("2024-12-31") < date_key("2025-01-01")
        assert date_key("2025-02-09") < date_key("2025-02-10")

    def test_impossible_day_still_orders(self) -> None:
        """Should place Feb 31 between Feb 28 and Mar 1 without calendar checks."""
        assert date_key("2025-02-28") < date_key("2025-02-31") < date_key("2025-03-01")

    def test_rejects_garbage(self) -> None:
        """Should raise ValueError for non-date text."""
        with pytest.raises(ValueError):
            date_key("yesterday")

        with pytest.raises(ValueError):
            date_key("2025-09")


class TestSafeDateKey:
    """Tests for safe_date_key."""

    def test_valid_date(self) -> None:
        """Should behave like date_key for valid input."""
        assert safe_date_key("2025-09-29") == (2025, 9, 29)

    def test_invalid_sorts_first(self) -> None:
        """Should sort unparseable dates before every real date."""
        assert safe_date_key("not-a-date") == (0, 0, 0)
        assert safe_date_key("not-a-date") < safe_date_key("0001-01-01")


class TestShiftYears:
    """Tests for shift_years."""

    def test_forward(self) -> None:
        """Should add whole years."""
        assert shift_years(date(2025, 9, 29), 1) == date(2026, 9, 29)

    def test_backward(self) -> None:
        """Should subtract whole years."""
        assert shift_years(date(2025, 9, 29), -10) == date(2015, 9, 29)

    def test_leap_day_clamps(self) -> None:
        """Should clamp Feb 29 to Feb 28 in non-leap years."""
        assert shift_years(date(2024, 2, 29), 1) == date(2025, 2, 28)


class TestAllowedDateWindow:
    """Tests for allowed_date_window."""

    def test_window(self) -> None:
        """Should span ten years back to one year ahead."""
        earliest, latest = allowed_date_window(date(2025, 9, 29))

        assert earliest == date(2015, 9, 29)
        assert latest == date(2026, 9, 29)


class TestTrailingWindow:
    """Tests for trailing_window."""

    def test_seven_days_includes_today(self) -> None:
        """Should cover today and the six days before it."""
        since, until = trailing_window(date(2025, 9, 29))

        assert since == "2025-09-23"
        assert until == "2025-09-29"

    def test_crosses_month_boundary(self) -> None:
        """Should handle windows crossing a month boundary."""
        since, until = trailing_window(date(2025, 3, 2))

        assert since == "2025-02-24"
        assert until == "2025-03-02"

    def test_custom_length(self) -> None:
        """Should honour a custom window length."""
        since, until = trailing_window(date(2025, 9, 29), days=1)

        assert since == until == "2025-09-29"
