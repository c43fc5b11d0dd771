# tests/conftest.py
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from contact_book_api.app.core.config import Settings
from contact_book_api.app.core.db import init_db
from contact_book_api.app.main import create_app
from contact_book_api.app.services.contact_service import ContactService


@pytest.fixture(scope="session", autouse=True)
def _tests_log_to_stdout():
    """
    Send test logs to stdout so they show up under pytest -s.
    Avoid duplicates if a handler is already present.
    """
    root = logging.getLogger()
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout:
            break
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(os.getenv("TEST_LOG_LEVEL", "INFO").upper())


# Make anyio run on asyncio so async tests work everywhere
@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "contacts.db")


@pytest.fixture
def settings(db_path: str) -> Settings:
    return Settings(database_url=db_path, cors_origins="*")


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings)
    # Entering the context runs the startup handler, which migrates the DB.
    with TestClient(app) as c:
        yield c


@pytest.fixture
def service(db_path: str) -> ContactService:
    init_db(db_path)
    return ContactService(db_path)


@pytest.fixture
def make_contact(client: TestClient):
    def _make(name: str, email: str, phone: str = "555-0100") -> dict:
        r = client.post("/api/contacts", json={"name": name, "email": email, "phone": phone})
        assert r.status_code == 201, r.text
        return r.json()["contact"]

    return _make
