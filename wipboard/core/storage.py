"""
FILE: wipboard/core/storage.py
PURPOSE: Durable key/value storage for board snapshots
EXPORTS:
  - Storage (protocol)
  - SqliteStorage (class)
  - MemoryStorage (class)
  - default_storage() -> SqliteStorage
DEPENDENCIES:
  - sqlite3 (stdlib)
  - pathlib (stdlib)
  - wipboard.core.config (data_dir)
  - wipboard.core.exceptions (StorageError)
NOTES:
  - Database stored at <data dir>/wipboard.db (~/.wipboard by default)
  - Auto-creates directory and the kv table on first use
  - One row per key; writes replace the row (last write wins)
  - Every write is committed before returning
"""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Dict, Optional, Protocol

from .config import data_dir
from .exceptions import StorageError

logger = logging.getLogger(__name__)

DB_FILENAME = "wipboard.db"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
)
"""


class Storage(Protocol):
    """Single-slot-per-key string store the board persists through."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SqliteStorage:
    """SQLite-backed key/value store."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else data_dir() / DB_FILENAME
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        """
        Open a connection, creating the directory and schema on first use.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        if not self._initialized:
            conn.execute(SCHEMA_SQL)
            conn.commit()
            self._initialized = True
        return conn

    def get(self, key: str) -> Optional[str]:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Could not read '{key}' from {self.db_path}: {e}") from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with closing(self._connect()) as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv (key, value, updated_at) VALUES (?, ?, datetime('now'))",
                    (key, value),
                )
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Could not write '{key}' to {self.db_path}: {e}") from e
        logger.debug("Stored %s (%d bytes)", key, len(value))

    def delete(self, key: str) -> None:
        try:
            with closing(self._connect()) as conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Could not delete '{key}' from {self.db_path}: {e}") from e


class MemoryStorage:
    """Dict-backed store for tests and embedding."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes += 1

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def default_storage() -> SqliteStorage:
    """SQLite storage in the current data directory."""
    return SqliteStorage()
