"""Shared test fixtures for the Chameleon Docs test suite.

Tests run against a temporary SQLite database created once per session.
Every table is emptied before each test for isolation, and the reader
cache and rate-limit buckets are reset alongside it.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="chameleon-test-")

# Configure the app before any of its modules are imported.
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_PER_MINUTE"] = "100000"
os.environ["DEDUPE_PAGE_VIEWS"] = "false"

import pytest
from fastapi.testclient import TestClient

from chameleon_docs.core.auth import SessionContext
from chameleon_docs.core.revalidation import clear_reader_cache
from chameleon_docs.database import Base, SessionLocal, engine, get_db
from chameleon_docs.main import app
from chameleon_docs.middleware.request_context import _rate_buckets
from chameleon_docs.services import auth_service

DEFAULT_PASSWORD = "correct horse battery"


@pytest.fixture(autouse=True)
def _clean_tables():
    """Empty every table before each test.

    Runs before (not after) the test so a failing test leaves its data
    behind for debugging.
    """
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    clear_reader_cache()
    _rate_buckets.clear()
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, name="Ada Lovelace", email="ada@example.com", password=DEFAULT_PASSWORD):
    return auth_service.register_user(db, name, email, password)


def session_for(user) -> SessionContext:
    return SessionContext(user_id=user.id, email=user.email, name=user.name)


@pytest.fixture()
def user(db):
    return make_user(db)


@pytest.fixture()
def session(user):
    return session_for(user)


def login(client, email="ada@example.com", password=DEFAULT_PASSWORD):
    """Sign in through the API; the client keeps the session cookie."""
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp


@pytest.fixture()
def auth_client(client, user):
    """TestClient signed in as ``user``."""
    login(client)
    return client


def make_project(client, name="Acme API", description=None) -> str:
    resp = client.post("/api/projects", json={"name": name, "description": description})
    assert resp.status_code == 201, resp.text
    return resp.json()["slug"]


def make_page(client, slug, title, section="") -> dict:
    resp = client.post(f"/api/projects/{slug}/pages", json={"title": title, "section": section})
    assert resp.status_code == 201, resp.text
    return resp.json()
