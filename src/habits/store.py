"""Whole-blob persistence of per-user habit state.

Every save overwrites the full UserState for a key; there are no partial
updates. A failed save raises PersistenceError and leaves the previous blob
in place.
"""

import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from db import wal_connect

from .errors import PersistenceError
from .models import UserState

logger = structlog.get_logger()


class StateStore(ABC):
    """Durable key-value store of UserState blobs.

    Subclasses implement raw blob access; ``load``/``save`` own the
    (de)serialization, lazy initialization and error conversion.
    """

    @abstractmethod
    def read_blob(self, user_key: str) -> Optional[str]:
        """Return the stored blob for a key, or None if absent."""
        ...

    @abstractmethod
    def write_blob(self, user_key: str, blob: str, version: int) -> None:
        """Atomically replace the blob for a key."""
        ...

    def load(self, user_key: str) -> UserState:
        """Load state for a key, creating and persisting an empty one if missing."""
        try:
            raw = self.read_blob(user_key)
        except PersistenceError:
            raise
        except Exception as e:
            logger.error("store.read_failed", user_key=user_key, error=str(e))
            raise PersistenceError(f"Could not read state: {e}") from e

        if raw is None:
            fresh = UserState()
            self.save(user_key, fresh)
            logger.info("store.state_initialized", user_key=user_key)
            return fresh

        try:
            return UserState.from_blob(raw)
        except ValueError as e:
            logger.error("store.corrupt_blob", user_key=user_key, error=str(e))
            raise PersistenceError(f"Stored state is unreadable: {e}") from e

    def save(self, user_key: str, state: UserState) -> None:
        try:
            self.write_blob(user_key, state.to_blob(), state.version)
        except PersistenceError:
            raise
        except Exception as e:
            logger.error("store.write_failed", user_key=user_key, error=str(e))
            raise PersistenceError(f"Could not save state: {e}") from e


class SQLiteStateStore(StateStore):
    """One row per user key in a WAL-mode SQLite database."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        conn = wal_connect(self.db_path)
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS user_states (
                    user_key TEXT PRIMARY KEY,
                    blob TEXT NOT NULL,
                    version INTEGER NOT NULL DEFAULT 1,
                    updated_at TIMESTAMP NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def read_blob(self, user_key: str) -> Optional[str]:
        conn = wal_connect(self.db_path)
        try:
            row = conn.execute(
                "SELECT blob FROM user_states WHERE user_key = ?", (user_key,)
            ).fetchone()
            return row[0] if row else None
        except sqlite3.Error as e:
            raise PersistenceError(f"SQLite read failed: {e}") from e
        finally:
            conn.close()

    def write_blob(self, user_key: str, blob: str, version: int) -> None:
        now = datetime.now(timezone.utc).isoformat()
        conn = wal_connect(self.db_path)
        try:
            # Connection context manager rolls back on error
            with conn:
                conn.execute(
                    """
                    INSERT INTO user_states (user_key, blob, version, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(user_key) DO UPDATE SET
                        blob = excluded.blob,
                        version = excluded.version,
                        updated_at = excluded.updated_at
                    """,
                    (user_key, blob, version, now),
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"SQLite write failed: {e}") from e
        finally:
            conn.close()

    def count(self) -> int:
        """Number of stored user states."""
        conn = wal_connect(self.db_path)
        try:
            return conn.execute("SELECT COUNT(*) FROM user_states").fetchone()[0]
        finally:
            conn.close()


class MemoryStateStore(StateStore):
    """Process-local store for tests and throwaway runs.

    Holds serialized blobs, not objects, so nothing outside the store can
    alias the stored copy.
    """

    def __init__(self):
        self._blobs: dict[str, str] = {}

    def read_blob(self, user_key: str) -> Optional[str]:
        return self._blobs.get(user_key)

    def write_blob(self, user_key: str, blob: str, version: int) -> None:
        self._blobs[user_key] = blob

    def count(self) -> int:
        return len(self._blobs)
