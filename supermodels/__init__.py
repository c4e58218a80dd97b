"""App records persisted in an embedded SQLite key/value store."""
from __future__ import annotations

from .db import Store, get_conn, get_db_path, init_store
from .errors import BucketNotFoundError, StoreError
from .models import App
from .services.apps_svc import AppsCollection

__all__ = [
    "App",
    "AppsCollection",
    "BucketNotFoundError",
    "Store",
    "StoreError",
    "get_conn",
    "get_db_path",
    "init_store",
]
