"""
Service layer for contacts.

This module provides the create, list, search, update and delete
operations for the contact book.  Each contact has a name, an email
address and a phone number; all three are required on creation and
on update (updates replace the whole record).

Email addresses are unique.  The service checks for an existing
address before writing, and the ``contacts`` table carries a unique
index on ``email`` so that two concurrent writers cannot both
succeed; a write rejected by the index is reported exactly like one
rejected by the check.

Business‑rule failures are raised as subclasses of ``ContactError``
(a ``ValueError``).  Unexpected database failures are wrapped in
``ContactStorageError`` with the original message.

All queries use parameterized statements to avoid SQL injection
vulnerabilities.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email

from contact_book_api.app.core.db import get_connection
from contact_book_api.app.schemas.contact import ContactCreate, ContactRead

logger = logging.getLogger(__name__)


class ContactError(ValueError):
    """Base class for contact service errors."""


class ContactValidationError(ContactError):
    """Raised when a payload is incomplete or malformed."""


class DuplicateEmailError(ContactError):
    """Raised when the email already belongs to another contact."""

    def __init__(self, message: str = "Email already exists") -> None:
        super().__init__(message)


class ContactNotFoundError(ContactError):
    """Raised when no contact has the requested id."""

    def __init__(self, message: str = "Contact not found") -> None:
        super().__init__(message)


class ContactStorageError(ContactError):
    """Raised when the database fails unexpectedly."""


def _utcnow() -> str:
    # Fixed-width ISO timestamps sort lexicographically in creation order.
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


# Largest value SQLite can store in an INTEGER PRIMARY KEY.
MAX_CONTACT_ID = 2 ** 63 - 1


def _id_in_range(contact_id: int) -> bool:
    return -MAX_CONTACT_ID - 1 <= contact_id <= MAX_CONTACT_ID


class ContactService:
    """Service class for managing contacts.

    The service is bound to a single SQLite database file.  The
    application creates one instance at startup and passes it to
    request handlers as a dependency; each call opens its own
    connection.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @staticmethod
    def validate(data: ContactCreate) -> Tuple[str, str, str]:
        """Return ``(name, email, phone)`` exactly as submitted.

        Raises ``ContactValidationError`` if a field is missing or blank
        or if the email address is not well formed.  Values are stored
        unchanged; an email with surrounding whitespace is malformed.
        """
        name = data.name or ""
        email = data.email or ""
        phone = data.phone or ""
        if not name.strip() or not email.strip() or not phone.strip():
            raise ContactValidationError("All fields are required")
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as exc:
            logger.debug("Rejected email %r: %s", email, exc)
            raise ContactValidationError("Invalid email format") from exc
        return name, email, phone

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def create_contact(self, data: ContactCreate) -> ContactRead:
        """Insert a new contact and return the stored record."""
        name, email, phone = self.validate(data)
        with self._storage() as conn:
            cursor = conn.cursor()
            if self._email_taken(cursor, email):
                logger.info("Rejected contact with existing email %s", email)
                raise DuplicateEmailError()
            now = _utcnow()
            cursor.execute(
                """
                INSERT INTO contacts (name, email, phone, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (name, email, phone, now, now),
            )
            contact_id = cursor.lastrowid
            conn.commit()
            logger.info("Created contact %s", contact_id)
            row = cursor.execute(
                "SELECT * FROM contacts WHERE id = ?", (contact_id,)
            ).fetchone()
            return self._row_to_contact(row)

    async def list_contacts(self) -> List[ContactRead]:
        """Return every contact, newest first."""
        with self._storage() as conn:
            rows = conn.execute(
                "SELECT * FROM contacts ORDER BY created_at DESC, id DESC"
            ).fetchall()
            return [self._row_to_contact(row) for row in rows]

    async def search_contacts(self, query: Optional[str]) -> List[ContactRead]:
        """Return contacts whose name or email contains ``query``.

        Matching is literal and case‑insensitive for any script (Python
        ``str.casefold`` semantics).  A missing or blank query matches
        every contact.
        """
        term = (query or "").strip()
        if not term:
            return await self.list_contacts()
        needle = term.casefold()
        with self._storage() as conn:
            rows = conn.execute(
                """
                SELECT * FROM contacts
                WHERE instr(casefold(name), ?) > 0 OR instr(casefold(email), ?) > 0
                ORDER BY created_at DESC, id DESC
                """,
                (needle, needle),
            ).fetchall()
            return [self._row_to_contact(row) for row in rows]

    async def get_contact(self, contact_id: int) -> Optional[ContactRead]:
        """Retrieve a single contact, or ``None`` if it does not exist."""
        if not _id_in_range(contact_id):
            return None
        with self._storage() as conn:
            row = conn.execute(
                "SELECT * FROM contacts WHERE id = ?", (contact_id,)
            ).fetchone()
            return self._row_to_contact(row) if row else None

    async def update_contact(self, contact_id: int, data: ContactCreate) -> ContactRead:
        """Replace name, email and phone of an existing contact.

        The email may stay the same; it only conflicts when another
        contact holds it.
        """
        name, email, phone = self.validate(data)
        if not _id_in_range(contact_id):
            raise ContactNotFoundError()
        with self._storage() as conn:
            cursor = conn.cursor()
            if self._email_taken(cursor, email, exclude_id=contact_id):
                logger.info("Rejected update of contact %s to existing email %s", contact_id, email)
                raise DuplicateEmailError()
            cursor.execute(
                """
                UPDATE contacts
                SET name = ?, email = ?, phone = ?, updated_at = ?
                WHERE id = ?
                """,
                (name, email, phone, _utcnow(), contact_id),
            )
            if cursor.rowcount == 0:
                raise ContactNotFoundError()
            conn.commit()
            logger.info("Updated contact %s", contact_id)
            row = cursor.execute(
                "SELECT * FROM contacts WHERE id = ?", (contact_id,)
            ).fetchone()
            return self._row_to_contact(row)

    async def delete_contact(self, contact_id: int) -> None:
        """Delete a contact by id.

        Raises ``ContactNotFoundError`` if nothing was deleted.
        """
        if not _id_in_range(contact_id):
            raise ContactNotFoundError()
        with self._storage() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM contacts WHERE id = ?", (contact_id,))
            if cursor.rowcount == 0:
                raise ContactNotFoundError()
            conn.commit()
            logger.info("Deleted contact %s", contact_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @contextmanager
    def _storage(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection and translate database errors.

        Uncommitted changes are rolled back when the block raises.
        """
        conn = None
        try:
            conn = get_connection(self.db_path)
            yield conn
        except ContactError:
            conn.rollback()
            raise
        except sqlite3.IntegrityError as exc:
            # The unique index caught a write that slipped past the check.
            conn.rollback()
            logger.warning("Unique email index rejected a write: %s", exc)
            raise DuplicateEmailError() from exc
        except sqlite3.Error as exc:
            if conn is not None:
                conn.rollback()
            logger.exception("Contact storage failure")
            raise ContactStorageError(str(exc)) from exc
        finally:
            if conn is not None:
                conn.close()

    @staticmethod
    def _email_taken(cursor: sqlite3.Cursor, email: str, exclude_id: Optional[int] = None) -> bool:
        if exclude_id is None:
            row = cursor.execute(
                "SELECT id FROM contacts WHERE email = ?", (email,)
            ).fetchone()
        else:
            row = cursor.execute(
                "SELECT id FROM contacts WHERE email = ? AND id != ?",
                (email, exclude_id),
            ).fetchone()
        return row is not None

    @staticmethod
    def _row_to_contact(row: sqlite3.Row) -> ContactRead:
        """Convert a database row to a ``ContactRead`` schema instance."""
        return ContactRead(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
