"""
Point the app at a throwaway SQLite file before anything imports liftlog,
then build the schema once for the whole run.
"""
import os
import tempfile
from pathlib import Path

_DB_DIR = Path(tempfile.mkdtemp(prefix="liftlog-tests-"))
os.environ["DB_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest  # noqa: E402

from liftlog import models  # noqa: E402,F401
from liftlog.db import Base, engine  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _schema():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)
    engine.dispose()
