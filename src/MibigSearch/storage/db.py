"""SQLite database utilities."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import ClassVar

from MibigSearch.core.errors import StoreUnavailableError
from MibigSearch.storage.migration import run_migrations


class DatabaseManager:
    """Shared database connection manager.

    One instance, and one connection, exists per resolved database path.
    The connection may be used from several threads; callers serialize
    access through ``lock``.

    Supports context manager protocol for automatic connection cleanup.
    """

    _instances: ClassVar[dict[Path, DatabaseManager]] = {}
    _instances_lock: ClassVar[threading.Lock] = threading.Lock()

    conn: sqlite3.Connection | None
    db_path: Path
    lock: threading.RLock

    def __new__(cls, db_path: Path):
        """Create or return the manager for ``db_path``.

        The schema is migrated to the latest version when the connection
        is first opened.
        """
        key = Path(db_path).resolve()
        with cls._instances_lock:
            instance = cls._instances.get(key)
            if instance is None:
                instance = super().__new__(cls)
                instance.db_path = key
                instance.lock = threading.RLock()
                conn = ensure_db(key)
                try:
                    run_migrations(conn)
                except Exception:
                    conn.close()
                    raise
                instance.conn = conn
                cls._instances[key] = instance
        return instance

    def get_connection(self) -> sqlite3.Connection:
        """Return the shared connection.

        Raises:
            StoreUnavailableError: If the manager has been closed.
        """
        if self.conn is None:
            raise StoreUnavailableError(f"database is closed: {self.db_path}")
        return self.conn

    def close(self) -> None:
        """Close the connection and forget this path's instance."""
        with type(self)._instances_lock:
            if self.conn is not None:
                self.conn.close()
                self.conn = None
            type(self)._instances.pop(self.db_path, None)

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def ensure_db(db_path: Path) -> sqlite3.Connection:
    """Ensure the database file exists and return a connection.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.execute("PRAGMA foreign_keys = ON")
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


def _casefold(value: str | None) -> str | None:
    """Unicode-aware counterpart of SQL lower(), which folds ASCII only."""
    return value.casefold() if isinstance(value, str) else value
