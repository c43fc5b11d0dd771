# tests/test_config.py
from __future__ import annotations

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from contact_book_api.app.core.config import Settings
from contact_book_api.app.core.db import get_database_path
from contact_book_api.app.main import create_app


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "/tmp/other.db")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com")
    s = Settings()
    assert s.database_url == "/tmp/other.db"
    assert s.port == 8080
    assert s.cors_origin_list == ["https://a.example.com", "https://b.example.com"]
    assert not s.cors_permissive


def test_settings_defaults(monkeypatch):
    for name in ("DATABASE_URL", "PORT", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.database_url == "contacts.db"
    assert s.port == 5000
    assert s.cors_permissive


def test_empty_cors_origins_is_permissive():
    assert Settings(cors_origins=" , ").cors_origin_list == ["*"]


def test_database_path_resolution(tmp_path):
    absolute = str(tmp_path / "c.db")
    assert get_database_path(absolute) == absolute
    assert get_database_path(f"sqlite:///{absolute}") == absolute
    relative = get_database_path("data/contacts.db")
    assert os.path.isabs(relative)
    assert relative.endswith(os.path.join("data", "contacts.db"))


def test_permissive_cors(client):
    r = client.get("/api/contacts", headers={"Origin": "https://anywhere.example.com"})
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_restricted_cors(db_path):
    allowed = "https://contactbook.example.com"
    app = create_app(Settings(database_url=db_path, cors_origins=allowed))
    with TestClient(app) as c:
        preflight = c.options(
            "/api/contacts",
            headers={"Origin": allowed, "Access-Control-Request-Method": "POST"},
        )
        assert preflight.status_code == 200
        assert preflight.headers["access-control-allow-origin"] == allowed

        r = c.get("/api/contacts", headers={"Origin": "https://evil.example.com"})
        assert r.status_code == 200
        assert "access-control-allow-origin" not in r.headers


def test_package_does_not_install_a_top_level_run_module():
    tomllib = pytest.importorskip("tomllib")
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    with pyproject.open("rb") as fh:
        data = tomllib.load(fh)
    modules = data["tool"]["setuptools"]["py-modules"]
    assert "run" not in modules
    assert "contact_book_client" in modules
