"""
Key-value persistence layer.

Accounts, saved profiles and the session marker are each stored as a single
JSON document under a fixed key. Any backend that can get/set/delete a JSON
value by key can stand in for SQLite.
"""
import sqlite3
import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

from services.errors import StorageError

logger = logging.getLogger(__name__)

USERS_KEY = "airtech_users"
USER_DATA_KEY = "airtech_user_data"
SESSION_KEY = "airtech_current_user"


class KeyValueStore:
    """Interface shared by every backing store."""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store. Values are copied through JSON so callers never share references."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Could not serialize value for '{key}': {e}") from e

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def init_db(db_path: str):
    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT DEFAULT (datetime('now'))
        )
    """)
    conn.commit()
    conn.close()


@contextmanager
def get_db(db_path: str):
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


class SQLiteKeyValueStore(KeyValueStore):
    def __init__(self, db_path: str):
        self.db_path = db_path
        try:
            init_db(db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Could not initialize database at {db_path}: {e}") from e

    def get(self, key: str) -> Optional[Any]:
        try:
            with get_db(self.db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Read of '{key}' failed: {e}") from e
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StorageError(f"Stored value for '{key}' is not valid JSON: {e}") from e

    def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Could not serialize value for '{key}': {e}") from e
        try:
            with get_db(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = datetime('now')
                    """,
                    (key, payload),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Write of '{key}' failed: {e}") from e

    def delete(self, key: str) -> None:
        try:
            with get_db(self.db_path) as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Delete of '{key}' failed: {e}") from e
