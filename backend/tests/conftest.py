"""
Point the app at a throwaway SQLite file before anything imports app.db,
then create the schema once. Runs before any test module loads.
"""
import os
import tempfile
import uuid

_tmp_dir = tempfile.mkdtemp(prefix="liftlog-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-not-for-prod"

import pytest  # noqa: E402

from app import models  # noqa: E402,F401  # registers tables
from app.db import Base, SessionLocal, engine  # noqa: E402

Base.metadata.create_all(engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_id():
    return f"user_{uuid.uuid4().hex[:10]}"


@pytest.fixture
def other_user_id():
    return f"user_{uuid.uuid4().hex[:10]}"
