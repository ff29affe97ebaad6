"""Store layer - provides persistence for the application.

This module re-exports the public store classes and functions for easy importing.
"""

from fintrack.store.records import TransactionStore, generate_id, normalize_description
from fintrack.store.settings import SettingsStore
from fintrack.store.storage import (
    KeyValueStorage,
    MemoryStorage,
    SqliteStorage,
    database_exists,
    get_db_path,
    init_database,
)
from fintrack.store.transfer import (
    default_export_filename,
    export_to_csv,
    export_to_json,
    parse_import,
    read_import_file,
)

__all__ = [
    # Storage
    "KeyValueStorage",
    "MemoryStorage",
    "SqliteStorage",
    "database_exists",
    "get_db_path",
    "init_database",
    # Stores
    "SettingsStore",
    "TransactionStore",
    "generate_id",
    "normalize_description",
    # Import / export
    "default_export_filename",
    "export_to_csv",
    "export_to_json",
    "parse_import",
    "read_import_file",
]
