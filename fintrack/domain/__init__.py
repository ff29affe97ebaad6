"""Domain models and types for fintrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from fintrack.domain.models import (
    CategoryName,
    Description,
    Money,
    Settings,
    Transaction,
    TransactionInput,
    TransactionUpdate,
)

__all__ = [
    "CategoryName",
    "Description",
    "Money",
    "Settings",
    "Transaction",
    "TransactionInput",
    "TransactionUpdate",
]
