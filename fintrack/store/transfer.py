"""Import and export of transactions as JSON (and CSV for export)."""

import json
from datetime import date, datetime, timezone
from decimal import Decimal, DecimalException, InvalidOperation
from pathlib import Path
from typing import Any

import pandas as pd

from fintrack.domain.models import (
    CategoryName,
    Description,
    Transaction,
    format_money_input,
    parse_money,
)
from fintrack.domain.validation import validate_transaction
from fintrack.exceptions import MalformedImportError
from fintrack.logging_setup import get_logger

logger = get_logger(__name__)

REQUIRED_TEXT_FIELDS = ("id", "description", "category", "date")

CSV_COLUMNS = ["id", "date", "description", "amount", "category", "createdAt", "updatedAt"]


def default_export_filename(today: date | None = None, extension: str = "json") -> str:
    """Build the default export file name, e.g. "transactions_2025-09-29.json"."""
    today = today or date.today()
    return f"transactions_{today.strftime('%Y-%m-%d')}.{extension}"


def export_to_json(transactions: list[Transaction]) -> str:
    """Serialize transactions as a pretty-printed JSON array."""
    return json.dumps([t.to_dict() for t in transactions], indent=2, ensure_ascii=False)


def export_to_csv(transactions: list[Transaction], path: Path) -> None:
    """Write transactions to a CSV file with one row per transaction.

    Args:
        transactions: Transactions to export.
        path: Destination file.
    """
    rows = [t.to_dict() for t in transactions]
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    df.to_csv(path, index=False)


def _render_amount(value: Any) -> str | None:
    """Render an imported amount as the text the amount validator expects.

    Returns:
        The rendered amount, or None if it is not a number with at most 2 decimals.
    """
    if isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    # Seven or more integer digits is already over the amount limit
    if not amount.is_finite() or amount.adjusted() > 6:
        return None
    try:
        exponent = amount.normalize().as_tuple().exponent
    except DecimalException:
        return None
    if exponent < -2:
        return None
    return format_money_input(parse_money(amount))


def _check_shape(item: Any) -> str | None:
    if not isinstance(item, dict):
        return "Expected an object"
    missing = [name for name in REQUIRED_TEXT_FIELDS if not item.get(name)]
    if item.get("amount") is None:
        missing.append("amount")
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    return None


def parse_import(text: str, today: date | None = None) -> list[Transaction]:
    """Parse and fully validate an import payload.

    The payload must be a JSON array of transaction objects. Every element must
    carry a non-empty id, description, category and date, a defined amount, and
    pass the same field validation as a manually created transaction.

    Args:
        text: JSON text.
        today: Reference date for the date window. Defaults to the current date.

    Returns:
        Transactions in payload order, with their original IDs.

    Raises:
        MalformedImportError: If anything is wrong. Nothing is returned partially.
    """
    today = today or date.today()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedImportError(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedImportError("Invalid format: expected an array")

    problems: dict[int, Any] = {}
    seen_ids: set[str] = set()
    for position, item in enumerate(data):
        shape_error = _check_shape(item)
        if shape_error:
            problems[position] = shape_error
            continue

        txn_id = str(item["id"])
        if txn_id in seen_ids:
            problems[position] = f"Duplicate transaction ID: {txn_id}"
            continue
        seen_ids.add(txn_id)

        amount = _render_amount(item["amount"])
        fields = {
            "description": str(item["description"]),
            "amount": amount,
            "category": str(item["category"]),
            "date": str(item["date"]),
        }
        errors = dict(validate_transaction(fields, today).errors)
        if amount is None:
            errors["amount"] = "Amount must be a number with at most 2 decimal places"
        if errors:
            problems[position] = errors

    if problems:
        logger.warning("Import rejected: %d invalid record(s)", len(problems))
        raise MalformedImportError("Invalid transaction format", problems)

    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    transactions = []
    for item in data:
        created_at = item.get("createdAt") if isinstance(item.get("createdAt"), str) else now
        updated_at = item.get("updatedAt") if isinstance(item.get("updatedAt"), str) else created_at
        transactions.append(
            Transaction(
                id=str(item["id"]),
                description=Description(str(item["description"])),
                amount=parse_money(item["amount"]),
                category=CategoryName(str(item["category"])),
                date=str(item["date"]),
                created_at=created_at,
                updated_at=updated_at,
            )
        )
    return transactions


def read_import_file(path: Path, today: date | None = None) -> list[Transaction]:
    """Read an import file completely, then parse it.

    Raises:
        MalformedImportError: If the file is not valid UTF-8 or the payload is rejected.
        OSError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedImportError(f"File is not UTF-8 text: {e}") from e
    return parse_import(text, today)
