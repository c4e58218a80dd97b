from __future__ import annotations

# supermodels/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterable, Iterator
import logging
import os
from pathlib import Path
import yaml

from .repository import bucket_repo

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) env SUPERMODELS_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) fallback: <project root>/supermodels.db
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "supermodels.db")

BUSY_TIMEOUT_MS = 5000
APPS_BUCKET = "Apps"


def _read_config_yaml(cfg_path: str | None = None) -> dict:
    cfg_path = cfg_path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"ignoring unreadable config {cfg_path}: {e}")
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def get_db_path(cfg_path: str | None = None) -> str:
    env_path = os.environ.get("SUPERMODELS_DB_PATH")
    cfg = _read_config_yaml(cfg_path)
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = _ROOT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None, create: bool = True) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection. Uses the explicit db_path if given, otherwise get_db_path().
    Autocommit mode: transactions are begun and ended explicitly by Store.

    With create=False the file must already exist and is opened as-is:
    nothing is created and the journal mode is left alone.
    """
    path = db_path or get_db_path()
    if create:
        target, uri = path, False
    else:
        target, uri = Path(path).absolute().as_uri() + "?mode=rw", True
    conn = sqlite3.connect(
        target,
        check_same_thread=False,
        isolation_level=None,
        timeout=BUSY_TIMEOUT_MS / 1000,
        uri=uri,
    )
    try:
        if create:
            conn.execute("PRAGMA journal_mode = WAL;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


class Store:
    """Handle on the embedded store. Owned by the caller; repositories only begin transactions on it."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or get_db_path()

    def __repr__(self) -> str:
        return f"Store({self.db_path!r})"

    @contextmanager
    def view(self) -> Iterator[sqlite3.Connection]:
        """Read-only transaction: a consistent snapshot for the duration of the block."""
        with get_conn(self.db_path, create=False) as conn:
            conn.execute("BEGIN")
            try:
                yield conn
            finally:
                conn.rollback()

    @contextmanager
    def update(self) -> Iterator[sqlite3.Connection]:
        """Write transaction: commits when the block exits cleanly, rolls back otherwise."""
        with get_conn(self.db_path, create=False) as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            conn.commit()


def init_store(db_path: str | None = None, buckets: Iterable[str] = (APPS_BUCKET,)) -> Store:
    """Create the store file (WAL mode) and any missing buckets."""
    store = Store(db_path)
    with get_conn(store.db_path) as conn:
        conn.execute("BEGIN IMMEDIATE")
        for name in buckets:
            bucket_repo.ensure_bucket(conn, name)
        conn.commit()
    logger.info(f"store ready at {store.db_path}")
    return store
