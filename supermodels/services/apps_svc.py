from __future__ import annotations

# supermodels/services/apps_svc.py
import logging

from ..db import APPS_BUCKET, Store
from ..logs import LogContext
from ..models import App, assign, reset
from ..repository import bucket_repo

logger = logging.getLogger(__name__)

# stored in place of a missing record
EMPTY_RECORD = b"{}"


def app_key(app_id: int) -> str:
    return str(int(app_id))


class AppsCollection:
    """
    Apps bucket access. Each call runs in exactly one store transaction;
    errors from encoding, decoding or the store reach the caller unchanged.
    """

    def __init__(self, store: Store, bucket: str = APPS_BUCKET):
        self.store = store
        self.bucket = bucket

    def create_or_update(self, app: App) -> None:
        """Create or fully replace the App identified by its AppId."""
        log = LogContext("APP_PUT")
        log.set_entity("App", app_key(app.AppId))
        try:
            raw = app.model_dump_json().encode("utf-8")
            log.set_payload(app.model_dump())
            with self.store.update() as conn:
                bucket_repo.put(conn, self.bucket, app_key(app.AppId), raw)
        except Exception as e:
            log.write("ERROR", str(e))
            raise
        log.write("OK")

    def destroy(self, app: App) -> None:
        """Delete the App identified by its AppId. Deleting a missing App is not an error."""
        log = LogContext("APP_DELETE")
        log.set_entity("App", app_key(app.AppId))
        try:
            with self.store.update() as conn:
                bucket_repo.delete(conn, self.bucket, app_key(app.AppId))
        except Exception as e:
            log.write("ERROR", str(e))
            raise
        log.write("OK")

    def get(self, app: App) -> None:
        """
        Load the App identified by app.AppId into `app`.

        All fields are reset first. A missing record leaves `app` at its
        zero value (AppId included), which is how absence is reported.
        """
        key = app_key(app.AppId)
        log = LogContext("APP_GET")
        log.set_entity("App", key)
        try:
            with self.store.view() as conn:
                raw = bucket_repo.get(conn, self.bucket, key)
            if raw is None:
                logger.debug(f"app {key} not stored, reading empty record")
                raw = EMPTY_RECORD
            reset(app)
            assign(app, App.model_validate_json(raw))
        except Exception as e:
            log.write("ERROR", str(e))
            raise
        log.set_after(app.model_dump())
        log.write("OK")
