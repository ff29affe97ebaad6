"""Durable key-value storage for JSON blobs.

The stores read and write whole values under two keys: ``transactions``
(a JSON array) and ``settings`` (a JSON object). Each write replaces the
previous value wholesale.
"""

import os
import sqlite3
from pathlib import Path
from typing import Protocol

from fintrack.exceptions import StorageError

TRANSACTIONS_KEY = "transactions"
SETTINGS_KEY = "settings"


class KeyValueStorage(Protocol):
    """Interface for the durable blob store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "fintrack" / "fintrack.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        StorageError: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """
        )
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise StorageError(f"Could not initialize database: {e}") from e
    finally:
        conn.close()


class SqliteStorage:
    """Key-value storage in a single SQLite table."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()
        init_database(self.db_path)

    def get(self, key: str) -> str | None:
        """Read the value stored under a key.

        Raises:
            StorageError: If the database cannot be read.
        """
        conn = sqlite3.connect(self.db_path)
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        except sqlite3.Error as e:
            raise StorageError(f"Could not read '{key}': {e}") from e
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under a key.

        Raises:
            StorageError: If the write fails. Nothing is changed in that case.
        """
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Could not write '{key}': {e}") from e
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Could not delete '{key}': {e}") from e
        finally:
            conn.close()


class MemoryStorage:
    """Dictionary-backed storage for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)
