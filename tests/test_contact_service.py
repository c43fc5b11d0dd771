# tests/test_contact_service.py
from __future__ import annotations

import sqlite3

import pytest

from contact_book_api.app.core.db import init_db
from contact_book_api.app.schemas.contact import ContactCreate
from contact_book_api.app.services.contact_service import (
    ContactNotFoundError,
    ContactService,
    ContactStorageError,
    ContactValidationError,
    DuplicateEmailError,
)

pytestmark = pytest.mark.anyio


def _payload(name="Ann", email="ann@example.com", phone="111") -> ContactCreate:
    return ContactCreate(name=name, email=email, phone=phone)


async def test_create_stores_fields_as_submitted(service):
    contact = await service.create_contact(_payload(name="  Ann  ", phone=" 111 "))
    assert contact.name == "  Ann  "
    assert contact.phone == " 111 "
    assert await service.get_contact(contact.id) == contact


async def test_get_unknown_returns_none(service):
    assert await service.get_contact(99) is None


@pytest.mark.parametrize(
    "payload, message",
    [
        (ContactCreate(email="a@example.com", phone="1"), "All fields are required"),
        (ContactCreate(name="A", email="", phone="1"), "All fields are required"),
        (ContactCreate(name="A", email="a@@example.com", phone="1"), "Invalid email format"),
        (ContactCreate(name="A", email="a.example.com", phone="1"), "Invalid email format"),
    ],
)
async def test_validation(service, payload, message):
    with pytest.raises(ContactValidationError, match=message):
        await service.create_contact(payload)
    assert await service.list_contacts() == []


async def test_unique_index_backs_up_the_check(service, monkeypatch):
    await service.create_contact(_payload())
    # Simulate a concurrent writer that passed the check at the same time.
    monkeypatch.setattr(ContactService, "_email_taken", staticmethod(lambda *args, **kwargs: False))
    with pytest.raises(DuplicateEmailError):
        await service.create_contact(_payload(name="Bob"))
    assert len(await service.list_contacts()) == 1


async def test_update_unknown_contact(service):
    with pytest.raises(ContactNotFoundError):
        await service.update_contact(5, _payload())


async def test_update_refreshes_updated_at(service):
    contact = await service.create_contact(_payload())
    updated = await service.update_contact(contact.id, _payload(name="Ann B"))
    assert updated.name == "Ann B"
    assert updated.created_at == contact.created_at
    assert updated.updated_at >= contact.updated_at


async def test_delete_unknown_contact(service):
    with pytest.raises(ContactNotFoundError):
        await service.delete_contact(1)


async def test_storage_errors_are_wrapped(tmp_path):
    service = ContactService(str(tmp_path / "empty.db"))
    with pytest.raises(ContactStorageError, match="no such table"):
        await service.list_contacts()


async def test_init_db_is_idempotent(db_path):
    init_db(db_path)
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        versions = [row[0] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
        indexes = {row[1] for row in conn.execute("PRAGMA index_list('contacts')")}
    finally:
        conn.close()
    assert versions == [1, 2]
    assert "idx_contacts_email" in indexes


async def test_email_with_surrounding_whitespace_is_malformed(service):
    with pytest.raises(ContactValidationError, match="Invalid email format"):
        await service.create_contact(_payload(email=" ann@example.com "))


async def test_search_folds_non_ascii_case(service):
    zoe = await service.create_contact(_payload(name="Zoë Ólafsdóttir", email="zoe@example.com"))
    await service.create_contact(_payload(name="Иван Петров", email="ivan@example.com"))
    assert [c.id for c in await service.search_contacts("ólafs")] == [zoe.id]
    assert [c.id for c in await service.search_contacts("ZOË")] == [zoe.id]
    assert [c.name for c in await service.search_contacts("пЕТР")] == ["Иван Петров"]


async def test_out_of_range_ids_are_unknown(service):
    huge = 2 ** 64
    assert await service.get_contact(huge) is None
    with pytest.raises(ContactNotFoundError):
        await service.update_contact(huge, _payload())
    with pytest.raises(ContactNotFoundError):
        await service.delete_contact(-huge)


async def test_timestamps_have_microsecond_precision(service):
    contact = await service.create_contact(_payload())
    # e.g. 2026-10-18T12:00:00.123456Z
    fraction = contact.created_at.rstrip("Z").split(".")[1]
    assert len(fraction) == 6
