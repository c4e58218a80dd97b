from __future__ import annotations

# A bucket is one key/value table inside the store.
import re
from sqlite3 import Connection
from typing import Optional

from ..errors import BucketNotFoundError

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _table(name: str) -> str:
    if not _NAME_RE.match(name):
        raise ValueError(f"invalid_bucket_name: {name!r}")
    return f'"{name}"'


def ensure_bucket(conn: Connection, name: str):
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {_table(name)} (
            key TEXT PRIMARY KEY,
            value BLOB NOT NULL
        )
        """
    )


def bucket_exists(conn: Connection, name: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (name,)
    ).fetchone()
    return row is not None


def _require(conn: Connection, name: str) -> str:
    table = _table(name)
    if not bucket_exists(conn, name):
        raise BucketNotFoundError(name)
    return table


def get(conn: Connection, name: str, key: str) -> Optional[bytes]:
    table = _require(conn, name)
    row = conn.execute(f"SELECT value FROM {table} WHERE key=?", (key,)).fetchone()
    return None if row is None else bytes(row["value"])


def put(conn: Connection, name: str, key: str, value: bytes):
    table = _require(conn, name)
    conn.execute(
        f"INSERT INTO {table}(key, value) VALUES(?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
        (key, value),
    )


def delete(conn: Connection, name: str, key: str):
    table = _require(conn, name)
    conn.execute(f"DELETE FROM {table} WHERE key=?", (key,))


def count(conn: Connection, name: str) -> int:
    table = _require(conn, name)
    return int(conn.execute(f"SELECT COUNT(1) AS c FROM {table}").fetchone()["c"])
