"""
SQLite database integration and simple migration system.

This module provides functions for resolving the database location
(``get_database_path``), obtaining a connection (``get_connection``)
and applying migrations on application start (``init_db``).  Every
function takes the database path explicitly; the application keeps a
single ``ContactService`` bound to that path and hands it to request
handlers, so nothing here relies on module‑level connection state.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

logger = logging.getLogger(__name__)

_SQLITE_PREFIX = "sqlite:///"

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: contacts table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS contacts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: enforce email uniqueness in storage and speed up the
    # default ordering.
    (
        2,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS idx_contacts_email ON contacts(email);
        CREATE INDEX IF NOT EXISTS idx_contacts_created_at ON contacts(created_at);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    A ``sqlite:///`` prefix is stripped.  Absolute paths are used
    directly; relative ones are resolved against the project root.
    """
    db_url = database_url
    if db_url.startswith(_SQLITE_PREFIX):
        db_url = db_url[len(_SQLITE_PREFIX):]
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parents[3]
    return str((base_dir / db_url).resolve())


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Timestamps are stored as ISO strings and returned unchanged.
    A ``casefold`` SQL function is registered for Unicode‑aware
    case‑insensitive matching; SQLite's own ``lower`` and ``LIKE`` only
    fold ASCII letters.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block exits normally and
    rolled back if it raises.
    """
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str) -> None:
    """Initialise the database and apply pending migrations.

    Creates the parent directory and the ``migrations`` table if they
    do not exist, checks the current schema version, and applies any
    newer entries of ``MIGRATIONS``.  To change the schema, append a
    migration with an incremented version number.
    """
    parent = Path(db_path).parent
    parent.mkdir(parents=True, exist_ok=True)

    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s to %s", version, db_path)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
