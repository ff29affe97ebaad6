"""Transaction record store.

Holds the ordered list of transactions in memory and mirrors it to a
key-value storage backend after every mutation. If the backend write fails,
the in-memory change is rolled back and the StorageError propagates.
"""

import json
import secrets
import string
import time
from collections.abc import Callable, Iterable
from datetime import date, datetime, timezone

from fintrack.domain.models import (
    CategoryName,
    Description,
    Transaction,
    TransactionInput,
    TransactionUpdate,
    parse_money,
)
from fintrack.domain.validation import validate_transaction
from fintrack.exceptions import (
    MalformedImportError,
    NotFoundError,
    StorageError,
    StoreInvariantError,
    TransactionValidationError,
)
from fintrack.logging_setup import get_logger
from fintrack.store.storage import TRANSACTIONS_KEY, KeyValueStorage

logger = get_logger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id() -> str:
    """Generate a transaction ID like "txn_1634567890123_k3j9x0a1b"."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"txn_{time.time_ns() // 1_000_000}_{suffix}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_description(description: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    return " ".join(description.split())


def normalize_input(fields: TransactionInput) -> TransactionInput:
    """Normalize raw input before validation.

    Only the description is rewritten; other fields are validated as typed.
    """
    return TransactionInput(
        description=normalize_description(fields.description),
        amount=fields.amount,
        category=fields.category,
        date=fields.date,
    )


def load_transactions(storage: KeyValueStorage) -> list[Transaction]:
    """Read the persisted transaction list.

    Args:
        storage: Storage backend.

    Returns:
        Transactions in stored order, or an empty list if nothing is stored.

    Raises:
        StorageError: If the stored value cannot be decoded.
    """
    raw = storage.get(TRANSACTIONS_KEY)
    if raw is None:
        return []
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError("expected a JSON array")
        return [Transaction.from_dict(item) for item in data]
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise StorageError(f"Stored transactions are corrupt: {e}") from e


class TransactionStore:
    """In-memory transaction list mirrored to durable storage.

    Args:
        storage: Durable key-value backend.
        clock: Returns the current time; used for timestamps and the date window.
        id_factory: Returns a fresh transaction ID.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._id_factory = id_factory
        self._transactions: list[Transaction] = load_transactions(storage)

    def __len__(self) -> int:
        return len(self._transactions)

    def _timestamp(self) -> str:
        return self._clock().isoformat(timespec="milliseconds")

    def _today(self) -> date:
        return self._clock().date()

    def _persist(self, previous: list[Transaction]) -> None:
        """Write the full list, restoring `previous` in memory if the write fails."""
        payload = json.dumps([t.to_dict() for t in self._transactions])
        try:
            self._storage.set(TRANSACTIONS_KEY, payload)
        except StorageError:
            self._transactions = previous
            logger.error("Persisting transactions failed; in-memory change rolled back")
            raise

    def _index_of(self, txn_id: str) -> int | None:
        for i, txn in enumerate(self._transactions):
            if txn.id == txn_id:
                return i
        return None

    def _new_id(self) -> str:
        txn_id = self._id_factory()
        if self._index_of(txn_id) is not None:
            raise StoreInvariantError(f"Generated transaction ID collides with an existing one: {txn_id}")
        return txn_id

    def _validated(self, fields: TransactionInput) -> TransactionInput:
        normalized = normalize_input(fields)
        result = validate_transaction(normalized.as_fields(), self._today())
        if not result.is_valid:
            raise TransactionValidationError(result.errors)
        return normalized

    def list(self) -> list[Transaction]:
        """Return a snapshot of all transactions in insertion order."""
        return list(self._transactions)

    def get(self, txn_id: str) -> Transaction | None:
        """Get a single transaction by ID, or None if absent."""
        index = self._index_of(txn_id)
        return None if index is None else self._transactions[index]

    def create(self, fields: TransactionInput) -> Transaction:
        """Validate and append a new transaction.

        Args:
            fields: Raw field values.

        Returns:
            The stored transaction.

        Raises:
            TransactionValidationError: If any field is invalid. Nothing is stored.
            StorageError: If persisting fails. Nothing is stored.
        """
        normalized = self._validated(fields)
        now = self._timestamp()

        txn = Transaction(
            id=self._new_id(),
            description=Description(normalized.description),
            amount=parse_money(normalized.amount),
            category=CategoryName(normalized.category),
            date=normalized.date,
            created_at=now,
            updated_at=now,
        )

        previous = self.list()
        self._transactions.append(txn)
        self._persist(previous)

        logger.info("Transaction added: %s", txn.id)
        return txn

    def update(self, txn_id: str, changes: TransactionUpdate) -> Transaction:
        """Merge changes into an existing transaction.

        Args:
            txn_id: Transaction ID.
            changes: Fields to change; None fields keep their current value.

        Returns:
            The updated transaction, at the same position in the list.

        Raises:
            NotFoundError: If no transaction has this ID.
            TransactionValidationError: If the merged fields are invalid. The record is unchanged.
            StorageError: If persisting fails. The record is unchanged.
        """
        index = self._index_of(txn_id)
        if index is None:
            raise NotFoundError(f"Transaction {txn_id} not found")

        existing = self._transactions[index]
        normalized = self._validated(changes.merge_into(existing.as_input()))

        updated = Transaction(
            id=existing.id,
            description=Description(normalized.description),
            amount=parse_money(normalized.amount),
            category=CategoryName(normalized.category),
            date=normalized.date,
            created_at=existing.created_at,
            updated_at=self._timestamp(),
        )

        previous = self.list()
        self._transactions[index] = updated
        self._persist(previous)

        logger.info("Transaction updated: %s", txn_id)
        return updated

    def remove(self, txn_id: str) -> bool:
        """Delete a transaction.

        Args:
            txn_id: Transaction ID.

        Returns:
            True if the transaction existed and was removed, False otherwise.

        Raises:
            StorageError: If persisting fails. The transaction is kept.
        """
        previous = self.list()
        index = self._index_of(txn_id)
        if index is not None:
            del self._transactions[index]
        self._persist(previous)

        if index is None:
            logger.info("Transaction not found for delete: %s", txn_id)
            return False
        logger.info("Transaction deleted: %s", txn_id)
        return True

    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        """Replace every stored transaction with the given ones.

        Raises:
            MalformedImportError: If the batch contains duplicate IDs.
            StorageError: If persisting fails. The old list is kept.
        """
        incoming = list(transactions)
        _check_unique_ids(incoming, existing=())

        previous = self.list()
        self._transactions = incoming
        self._persist(previous)
        logger.info("Transactions replaced: %d", len(incoming))

    def import_many(self, transactions: Iterable[Transaction]) -> None:
        """Append imported transactions after the existing ones.

        Raises:
            MalformedImportError: If an ID repeats within the batch or already exists.
            StorageError: If persisting fails. Nothing is appended.
        """
        incoming = list(transactions)
        _check_unique_ids(incoming, existing=self._transactions)

        previous = self.list()
        self._transactions.extend(incoming)
        self._persist(previous)
        logger.info("Transactions imported: %d", len(incoming))

    def clear(self) -> None:
        """Remove every transaction, in memory and in storage.

        Raises:
            StorageError: If the stored list cannot be deleted. Nothing is removed.
        """
        try:
            self._storage.delete(TRANSACTIONS_KEY)
        except StorageError:
            logger.error("Clearing stored transactions failed; keeping in-memory list")
            raise
        self._transactions = []
        logger.info("All transactions cleared")


def _check_unique_ids(incoming: list[Transaction], existing: Iterable[Transaction]) -> None:
    seen = {t.id for t in existing}
    duplicates: dict[int, str] = {}
    for position, txn in enumerate(incoming):
        if txn.id in seen:
            duplicates[position] = f"Duplicate transaction ID: {txn.id}"
        seen.add(txn.id)
    if duplicates:
        raise MalformedImportError("Import contains duplicate transaction IDs", duplicates)
