"""SQLite connection helper for the state store."""

import sqlite3
from pathlib import Path


def wal_connect(db_path: str | Path, timeout: float = 5.0) -> sqlite3.Connection:
    """Open a connection in WAL mode.

    WAL lets readers proceed while another connection writes a user's blob;
    ``timeout`` bounds how long a writer waits on a locked database.
    """
    conn = sqlite3.connect(str(db_path), timeout=timeout)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(f"PRAGMA busy_timeout={int(timeout * 1000)}")
    return conn
