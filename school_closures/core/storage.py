"""
Key-value storage medium for the record store.
A whole serialized collection is saved and loaded under one fixed key.
"""

import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Generator, Optional


class StorageQuotaExceeded(OSError):
    """Raised when a write would exceed the storage quota."""
    pass


class IKeyValueStorage(ABC):
    """Abstract interface for the persisted storage medium."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the text saved under key, or None when absent."""
        pass

    @abstractmethod
    def save(self, key: str, text: str) -> None:
        """Replace the text saved under key. Raises on failure."""
        pass

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove the text saved under key."""
        pass

    def health_check(self) -> bool:
        return True


class InMemoryStorage(IKeyValueStorage):
    """Dictionary-backed storage for tests and session-only use."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self._data: Dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, text: str) -> None:
        if self.quota_bytes is not None:
            others = sum(len(v.encode("utf-8")) for k, v in self._data.items() if k != key)
            if others + len(text.encode("utf-8")) > self.quota_bytes:
                raise StorageQuotaExceeded(f"Storage quota of {self.quota_bytes} bytes exceeded")
        self._data[key] = text

    def clear(self, key: str) -> None:
        self._data.pop(key, None)


class SQLiteStorage(IKeyValueStorage):
    """SQLite-backed storage using a single kv table."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.init_db()

    @contextmanager
    def get_db(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a SQLite database connection."""
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self):
        """Initialize the database with the kv table."""
        with self.get_db() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            conn.commit()

    def load(self, key: str) -> Optional[str]:
        with self.get_db() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def save(self, key: str, text: str) -> None:
        with self.get_db() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
                (key, text)
            )
            conn.commit()

    def clear(self, key: str) -> None:
        with self.get_db() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()

    def health_check(self) -> bool:
        """Check that the kv table is reachable."""
        try:
            with self.get_db() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='kv'")
                return cursor.fetchone() is not None
        except sqlite3.Error:
            return False
