"""
supermodels command line

Commands:
  init       Create the store file and the Apps bucket
  put        Create or replace an App
  get        Print an App as JSON (the zero App when it is not stored)
  destroy    Delete an App (no error when it is not stored)

The store path comes from --db, else SUPERMODELS_DB_PATH, else config.yaml.
"""

import argparse
import logging
import sqlite3
import sys

from pydantic import ValidationError

from .db import APPS_BUCKET, Store, init_store
from .errors import StoreError
from .models import App
from .repository import bucket_repo
from .services.apps_svc import AppsCollection


def env_pair(item: str) -> tuple[str, str]:
    k, sep, v = item.partition("=")
    if not sep or not k:
        raise argparse.ArgumentTypeError(f"invalid env {item!r}, expected KEY=VALUE")
    return k, v


# ---------------- Commands ----------------

def cmd_init(args):
    store = init_store(args.db)
    with store.view() as conn:
        n = bucket_repo.count(conn, APPS_BUCKET)
    print(f"Store initialized at {store.db_path} ({n} apps).")


def cmd_put(args):
    app = App(
        AppId=args.app_id,
        Commit=args.commit,
        ContainerId=args.container_id,
        Env=dict(args.env or []),
        ImageId=args.image_id,
    )
    AppsCollection(Store(args.db)).create_or_update(app)
    print(f"App {app.AppId} saved.")


def cmd_get(args):
    app = App(AppId=args.app_id)
    AppsCollection(Store(args.db)).get(app)
    print(app.model_dump_json(indent=2))


def cmd_destroy(args):
    AppsCollection(Store(args.db)).destroy(App(AppId=args.app_id))
    print(f"App {args.app_id} removed.")


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="supermodels", description="App records store (SQLite)")
    parser.add_argument("--db", default=None, help="store path")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create store and buckets")
    p_init.set_defaults(func=cmd_init)

    p_put = sub.add_parser("put", help="create or replace an app")
    p_put.add_argument("--app-id", required=True, type=int)
    p_put.add_argument("--commit", default="")
    p_put.add_argument("--container-id", default="")
    p_put.add_argument("--image-id", default="")
    p_put.add_argument("--env", action="append", type=env_pair, metavar="KEY=VALUE")
    p_put.set_defaults(func=cmd_put)

    p_get = sub.add_parser("get", help="print an app")
    p_get.add_argument("--app-id", required=True, type=int)
    p_get.set_defaults(func=cmd_get)

    p_rm = sub.add_parser("destroy", help="delete an app")
    p_rm.add_argument("--app-id", required=True, type=int)
    p_rm.set_defaults(func=cmd_destroy)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        args.func(args)
    except (StoreError, sqlite3.Error, ValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
