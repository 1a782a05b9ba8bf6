"""
Database Manager for FlashCalc
Key-value persistence for the current expression and calculation history
"""
import logging
import sqlite3
from dataclasses import dataclass
from typing import Optional

import config

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the backing storage medium cannot be read or written."""


@dataclass(frozen=True)
class StoreResult:
    ok: bool
    value: Optional[str] = None
    error: Optional[str] = None


class Database:
    """SQLite-backed key-value store.

    Every call opens its own connection so the store can be shared between
    the GUI process and the web server process.
    """

    def __init__(self, db_path=config.DB_PATH):
        self.db_path = db_path
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open {self.db_path}: {e}") from e

    def init_database(self):
        """Initialize database tables"""
        conn = self.get_connection()
        try:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            ''')
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"cannot initialize {self.db_path}: {e}") from e
        finally:
            conn.close()

    def get(self, key):
        """Return the stored value for key, or None when absent"""
        conn = self.get_connection()
        try:
            row = conn.execute('SELECT value FROM kv_store WHERE key = ?', (key,)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"read of {key!r} failed: {e}") from e
        finally:
            conn.close()
        return row[0] if row else None

    def set(self, key, value):
        """Insert or replace the value stored under key"""
        conn = self.get_connection()
        try:
            conn.execute('''
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            ''', (key, value))
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"write of {key!r} failed: {e}") from e
        finally:
            conn.close()


class MemoryStore:
    """In-process key-value store with the same interface as Database."""

    def __init__(self, initial=None, fail_reads=False, fail_writes=False):
        self.data = dict(initial or {})
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.writes = 0

    def get(self, key):
        if self.fail_reads:
            raise StoreError("storage disabled")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise StoreError("quota exceeded")
        self.data[key] = value
        self.writes += 1


def read_value(store, key) -> StoreResult:
    """Read key from store, reporting failure instead of raising."""
    try:
        return StoreResult(ok=True, value=store.get(key))
    except StoreError as e:
        logger.warning("Store read failed for %s: %s", key, e)
        return StoreResult(ok=False, error=str(e))


def write_value(store, key, value) -> StoreResult:
    """Write key to store, reporting failure instead of raising."""
    try:
        store.set(key, value)
        return StoreResult(ok=True, value=value)
    except StoreError as e:
        logger.warning("Store write failed for %s: %s", key, e)
        return StoreResult(ok=False, error=str(e))
