"""Tests for fintrack.store.transfer."""

import json
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from fintrack.domain.models import CategoryName, Description, Money, Transaction
from fintrack.exceptions import MalformedImportError
from fintrack.store.transfer import (
    default_export_filename,
    export_to_csv,
    export_to_json,
    parse_import,
    read_import_file,
)

TODAY = date(2025, 9, 29)


def txn(txn_id: str, description: str = "Coffee", amount: int = 450) -> Transaction:
    return Transaction(
        id=txn_id,
        description=Description(description),
        amount=Money(amount),
        category=CategoryName("Food"),
        date="2025-09-29",
        created_at="2025-09-29T10:00:00.000+00:00",
        updated_at="2025-09-29T11:00:00.000+00:00",
    )


def record(**overrides: object) -> dict:
    data: dict = {
        "id": "txn_1",
        "description": "Coffee",
        "amount": 4.5,
        "category": "Food",
        "date": "2025-09-29",
    }
    data.update(overrides)
    return data


class TestExport:
    """Tests for export_to_json, export_to_csv and default_export_filename."""

    def test_default_filename(self) -> None:
        """Should include the date and extension."""
        assert default_export_filename(TODAY) == "transactions_2025-09-29.json"
        assert default_export_filename(TODAY, "csv") == "transactions_2025-09-29.csv"

    def test_json_is_pretty_array(self) -> None:
        """Should write an indented JSON array with numeric amounts."""
        text = export_to_json([txn("a"), txn("b", amount=1200)])

        assert text.startswith("[\n  {")
        data = json.loads(text)
        assert [item["id"] for item in data] == ["a", "b"]
        assert [item["amount"] for item in data] == [4.5, 12]

    def test_json_export_imports_back(self) -> None:
        """Should produce a payload that imports to the same records."""
        records = [txn("a"), txn("b", description="Green tea", amount=875)]

        assert parse_import(export_to_json(records), TODAY) == records

    def test_csv(self, tmp_path: Path) -> None:
        """Should write one row per transaction with a header."""
        path = tmp_path / "out.csv"

        export_to_csv([txn("a"), txn("b", amount=1200)], path)

        df = pd.read_csv(path)
        assert list(df.columns) == ["id", "date", "description", "amount", "category", "createdAt", "updatedAt"]
        assert list(df["id"]) == ["a", "b"]
        assert list(df["amount"]) == [4.5, 12.0]

    def test_csv_empty(self, tmp_path: Path) -> None:
        """Should write just the header for no transactions."""
        path = tmp_path / "out.csv"

        export_to_csv([], path)

        assert path.read_text().strip() == "id,date,description,amount,category,createdAt,updatedAt"


class TestParseImport:
    """Tests for parse_import."""

    def test_valid(self) -> None:
        """Should keep IDs and fill missing timestamps."""
        [imported] = parse_import(json.dumps([record()]), TODAY)

        assert imported.id == "txn_1"
        assert imported.amount == Money(450)
        assert imported.created_at
        assert imported.updated_at == imported.created_at

    def test_amount_as_string(self) -> None:
        """Should accept numeric strings."""
        [imported] = parse_import(json.dumps([record(amount="12.50")]), TODAY)

        assert imported.amount == Money(1250)

    def test_empty_array(self) -> None:
        """Should accept an empty array."""
        assert parse_import("[]", TODAY) == []

    def test_invalid_json(self) -> None:
        """Should reject text that is not JSON."""
        with pytest.raises(MalformedImportError, match="Invalid JSON"):
            parse_import("{oops", TODAY)

    def test_not_an_array(self) -> None:
        """Should reject a top-level object."""
        with pytest.raises(MalformedImportError, match="expected an array"):
            parse_import(json.dumps(record()), TODAY)

    def test_missing_fields(self) -> None:
        """Should name the missing fields per record."""
        payload = [record(), {"id": "txn_2", "description": "Tea"}]

        with pytest.raises(MalformedImportError) as exc_info:
            parse_import(json.dumps(payload), TODAY)

        assert list(exc_info.value.details) == [1]
        assert "amount" in exc_info.value.details[1]
        assert "category" in exc_info.value.details[1]

    def test_empty_id(self) -> None:
        """Should treat an empty ID as missing."""
        with pytest.raises(MalformedImportError):
            parse_import(json.dumps([record(id="")]), TODAY)

    def test_non_object(self) -> None:
        """Should reject array elements that are not objects."""
        with pytest.raises(MalformedImportError) as exc_info:
            parse_import(json.dumps([record(), "Coffee"]), TODAY)

        assert exc_info.value.details == {1: "Expected an object"}

    def test_field_validation(self) -> None:
        """Should apply the same field rules as manual entry."""
        payload = [record(description="lunch lunch", category="Food123")]

        with pytest.raises(MalformedImportError) as exc_info:
            parse_import(json.dumps(payload), TODAY)

        assert set(exc_info.value.details[0]) == {"description", "category"}

    def test_rejects_sub_cent_amounts(self) -> None:
        """Should reject amounts with more than two decimals."""
        with pytest.raises(MalformedImportError) as exc_info:
            parse_import(json.dumps([record(amount=4.505)]), TODAY)

        assert "amount" in exc_info.value.details[0]

    @pytest.mark.parametrize("amount", ["1E5000", "1E999999999", "1e7", 1e400])
    def test_rejects_huge_amounts(self, amount: object) -> None:
        """Should reject amounts with huge exponents instead of crashing."""
        with pytest.raises(MalformedImportError) as exc_info:
            parse_import(json.dumps([record(amount=amount)]), TODAY)

        assert "amount" in exc_info.value.details[0]

    def test_duplicate_ids(self) -> None:
        """Should reject a payload that repeats an ID."""
        with pytest.raises(MalformedImportError) as exc_info:
            parse_import(json.dumps([record(), record()]), TODAY)

        assert exc_info.value.details == {1: "Duplicate transaction ID: txn_1"}

    def test_all_or_nothing(self) -> None:
        """Should return nothing when any record is invalid."""
        payload = [record(id="a"), record(id="b"), record(id="c", amount=0)]

        with pytest.raises(MalformedImportError) as exc_info:
            parse_import(json.dumps(payload), TODAY)

        assert list(exc_info.value.details) == [2]


class TestReadImportFile:
    """Tests for read_import_file."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """Should parse the file contents."""
        path = tmp_path / "import.json"
        path.write_text(json.dumps([record()]), encoding="utf-8")

        assert [t.id for t in read_import_file(path, TODAY)] == ["txn_1"]

    def test_not_utf8(self, tmp_path: Path) -> None:
        """Should reject binary files."""
        path = tmp_path / "import.json"
        path.write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(MalformedImportError):
            read_import_file(path, TODAY)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should let OSError propagate for a missing file."""
        with pytest.raises(OSError):
            read_import_file(tmp_path / "missing.json", TODAY)
