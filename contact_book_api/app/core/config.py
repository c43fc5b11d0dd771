"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a deployment you should
at least set ``DATABASE_URL`` and ``CORS_ORIGINS``.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = _env("PROJECT_NAME", "Contact Book API")
    api_version: str = _env("API_VERSION", "1.0.0")
    log_level: str = _env("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to console output.
    log_file: str = _env("LOG_FILE", "")

    # Path or connection string for the SQLite database.  A
    # ``sqlite:///`` prefix is accepted and stripped.  Relative paths are
    # resolved against the project root by the ``db`` module.
    database_url: str = _env("DATABASE_URL", "contacts.db")

    # Comma‑separated list of origins allowed to call the API from a
    # browser.  ``*`` allows any origin.
    cors_origins: str = _env("CORS_ORIGINS", "*")

    host: str = _env("HOST", "0.0.0.0")
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "5000")))

    @property
    def cors_origin_list(self) -> List[str]:
        """Return the configured origins as a list.

        An empty value is treated like ``*``.
        """
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        if not origins or "*" in origins:
            return ["*"]
        return origins

    @property
    def cors_permissive(self) -> bool:
        return self.cors_origin_list == ["*"]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Values are read when the
# instance is created, so environment variables should be set before
# importing this module.
settings = Settings()
