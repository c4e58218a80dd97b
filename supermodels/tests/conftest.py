import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "supermodels_test.db"
    # Point the store to this temp DB
    os.environ["SUPERMODELS_DB_PATH"] = str(path)
    from supermodels.db import init_store
    init_store(str(path))
    return str(path)


@pytest.fixture()
def store(tmp_db_path):
    from supermodels.db import Store
    return Store(tmp_db_path)


@pytest.fixture()
def apps(store):
    from supermodels.services.apps_svc import AppsCollection
    return AppsCollection(store)


@pytest.fixture()
def bare_store(tmp_path):
    """A store whose file exists but holds no buckets."""
    from supermodels.db import Store
    path = tmp_path / "bare.db"
    conn = sqlite3.connect(str(path))
    conn.execute("CREATE TABLE other (x)")
    conn.commit()
    conn.close()
    return Store(str(path))


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("SUPERMODELS_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.execute('DELETE FROM "Apps"')
        conn.commit()
    finally:
        conn.close()
    yield
