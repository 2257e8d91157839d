# tests/conftest.py

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

# Settings are read at import time, so the environment must be ready first
_DB_DIR = Path(tempfile.mkdtemp(prefix="task_manager_tests_"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.sqlite3'}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEFAULTS"] = "false"
os.environ["SECRET_KEY"] = "test-secret"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from task_manager import models  # noqa: E402,F401
from task_manager.core.auth import CurrentUser  # noqa: E402
from task_manager.core.database import Base, SessionLocal, engine  # noqa: E402
from task_manager.core.security import create_access_token  # noqa: E402
from task_manager.main import app  # noqa: E402
from task_manager.models.user import UserTypeEnum  # noqa: E402
from task_manager.routers.tasks import get_clock  # noqa: E402
from task_manager.services import users as user_service  # noqa: E402

FIXED_NOW = datetime(2024, 5, 17, 9, 30, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture(autouse=True)
def _schema():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def user(db):
    return user_service.create_user(db, "John", "Doe", "john@example.com", "secret")


@pytest.fixture()
def other_user(db):
    return user_service.create_user(db, "Jane", "Roe", "jane@example.com", "secret")


@pytest.fixture()
def admin(db):
    return user_service.create_user(
        db, "Ada", "Admin", "admin@example.com", "secret", user_type=UserTypeEnum.admin
    )


@pytest.fixture()
def principal(user) -> CurrentUser:
    return CurrentUser.from_user(user)


@pytest.fixture()
def client():
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def bearer(email: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(email)}"}


@pytest.fixture()
def auth_headers(user) -> dict:
    return bearer(user.email)
