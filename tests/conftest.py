import sqlite3

import pytest
from fastapi.testclient import TestClient

from external_links_api.app.core.config import settings
from external_links_api.app.core.db import init_db
from external_links_api.app.core.security import create_access_token
from external_links_api.app.main import app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the app at a fresh, migrated SQLite file."""
    path = str(tmp_path / "external_links.db")
    monkeypatch.setattr(settings, "database_url", path)
    init_db()
    return path


@pytest.fixture
def fetch_rows(db_path):
    """Run a raw query against the test database and return dict rows."""

    def _fetch(sql, params=()):
        conn = sqlite3.connect(db_path)
        conn.row_factory = sqlite3.Row
        try:
            return [dict(row) for row in conn.execute(sql, params).fetchall()]
        finally:
            conn.close()

    return _fetch


@pytest.fixture
def client(db_path):
    return TestClient(app)


def _headers(user_id, role_id):
    token = create_access_token({"sub": f"user{user_id}@example.com", "user_id": user_id, "role_id": role_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return _headers(7, 2)


@pytest.fixture
def user_headers():
    return _headers(8, 3)
