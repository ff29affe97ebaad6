"""Domain type definitions for fintrack.

These NewTypes and dataclasses provide semantic clarity and help with type checking:
- Money: Amount in cents (minor units)
- CategoryName: Name of a spending category
- Description: Transaction description text
- Transaction: A persisted record, immutable once built
- TransactionInput / TransactionUpdate: Raw form input for create and update
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Category name for spending categories
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)

BASE_CURRENCY = "USD"

DEFAULT_BUDGET_CAP = Money(50000)

DEFAULT_CURRENCIES: dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.85,
    "RWF": 1300.0,
}


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record."""

    id: str
    description: Description
    amount: Money
    category: CategoryName
    date: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape (camelCase keys, amount in major units)."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": money_to_number(self.amount),
            "category": self.category,
            "date": self.date,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """Build a transaction from its persisted JSON shape.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If the amount is not numeric.
        """
        created_at = str(data.get("createdAt") or "")
        return cls(
            id=str(data["id"]),
            description=Description(str(data["description"])),
            amount=parse_money(data["amount"]),
            category=CategoryName(str(data["category"])),
            date=str(data["date"]),
            created_at=created_at,
            updated_at=str(data.get("updatedAt") or created_at),
        )

    def as_input(self) -> "TransactionInput":
        """Render the record back into raw form fields."""
        return TransactionInput(
            description=self.description,
            amount=format_money_input(self.amount),
            category=self.category,
            date=self.date,
        )


@dataclass(frozen=True)
class TransactionInput:
    """Raw field values for creating a transaction, as typed by the user."""

    description: str
    amount: str
    category: str
    date: str

    def as_fields(self) -> dict[str, str]:
        return {
            "description": self.description,
            "amount": self.amount,
            "category": self.category,
            "date": self.date,
        }


@dataclass(frozen=True)
class TransactionUpdate:
    """Partial field values for updating a transaction. None means unchanged."""

    description: str | None = None
    amount: str | None = None
    category: str | None = None
    date: str | None = None

    def merge_into(self, base: TransactionInput) -> TransactionInput:
        """Overlay the supplied fields onto an existing input."""
        return TransactionInput(
            description=base.description if self.description is None else self.description,
            amount=base.amount if self.amount is None else self.amount,
            category=base.category if self.category is None else self.category,
            date=base.date if self.date is None else self.date,
        )


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    budget_cap: Money = DEFAULT_BUDGET_CAP
    currencies: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_CURRENCIES))

    def to_dict(self) -> dict[str, Any]:
        return {
            "budgetCap": money_to_number(self.budget_cap),
            "currencies": dict(self.currencies),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Build settings from the persisted JSON shape, defaulting missing keys."""
        budget_cap = DEFAULT_BUDGET_CAP
        if data.get("budgetCap") is not None:
            budget_cap = parse_money(data["budgetCap"])

        currencies = {str(code): float(rate) for code, rate in (data.get("currencies") or {}).items()}
        currencies[BASE_CURRENCY] = 1.0
        return cls(budget_cap=budget_cap, currencies=currencies)


def parse_money(value: Any) -> Money:
    """Convert a major-unit amount (number or numeric string) to cents.

    Args:
        value: Amount such as 4.5, "12.50" or 12.

    Returns:
        Amount in cents, rounded half-even to the nearest cent.

    Raises:
        ValueError: If the value is not numeric.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary amount: {value!r}")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a monetary amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a monetary amount: {value!r}")
    return Money(int((amount * 100).to_integral_value()))


def money_to_number(amount: Money) -> int | float:
    """Convert cents to a JSON-friendly major-unit number (450 -> 4.5, 1200 -> 12)."""
    if amount % 100 == 0:
        return amount // 100
    return amount / 100


def format_money_plain(amount: Money) -> str:
    """Format cents as the shortest decimal string (450 -> "4.5", 1200 -> "12")."""
    text = f"{amount / 100:.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_money_input(amount: Money) -> str:
    """Format cents the way the amount field expects it ("4.50", "12")."""
    if amount % 100 == 0:
        return str(amount // 100)
    return f"{amount / 100:.2f}"
