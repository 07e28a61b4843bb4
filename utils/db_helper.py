import sqlite3
from pathlib import Path
from typing import Dict, List, Optional

from app import config
from app.errors import DatabaseError


def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS kv(
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """)
    conn.execute("""
    CREATE TABLE IF NOT EXISTS users(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT,
        password TEXT,
        progress TEXT NOT NULL DEFAULT '[]',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)


def get_conn(db_path=None):
    path = Path(db_path or config.DB_PATH)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path))
        _ensure_schema(conn)
    except (OSError, sqlite3.Error) as e:
        raise DatabaseError(str(e)) from e
    return conn


class MemoryStore:
    """Key/value store kept in a dict; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqliteStore:
    """Key/value store in the application database (one row per key)."""

    def __init__(self, db_path=None):
        self.db_path = db_path or config.DB_PATH

    def get(self, key: str) -> Optional[str]:
        conn = get_conn(self.db_path)
        try:
            row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
            return row[0] if row else None
        except sqlite3.Error as e:
            raise DatabaseError(str(e)) from e
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = get_conn(self.db_path)
        try:
            with conn:
                conn.execute(
                    "INSERT INTO kv(key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (key, value),
                )
        except sqlite3.Error as e:
            raise DatabaseError(str(e)) from e
        finally:
            conn.close()


def register_user(username: str, password: str, db_path=None) -> int:
    # no duplicate check and no hashing: the registration endpoint is a placeholder
    conn = get_conn(db_path)
    try:
        with conn:
            cur = conn.execute(
                "INSERT INTO users(username, password) VALUES (?, ?)",
                (username, password),
            )
        return cur.lastrowid
    except sqlite3.Error as e:
        raise DatabaseError(str(e)) from e
    finally:
        conn.close()


def list_users(db_path=None) -> List[str]:
    conn = get_conn(db_path)
    try:
        return [r[0] for r in conn.execute("SELECT username FROM users ORDER BY id")]
    except sqlite3.Error as e:
        raise DatabaseError(str(e)) from e
    finally:
        conn.close()
