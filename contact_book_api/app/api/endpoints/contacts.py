"""
Contact endpoints.

These routes expose create, list, search, update and delete for the
contact book.  Handlers delegate to ``ContactService`` and translate
its exceptions into HTTP errors:

* invalid payloads and duplicate emails → 400;
* unknown ids → 404;
* database failures → 500 with the database message.
"""

from typing import List, NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from contact_book_api.app.api.deps import get_contact_service
from contact_book_api.app.schemas.contact import (
    ContactCreate,
    ContactMessage,
    ContactRead,
    ContactUpdate,
    MessageResponse,
)
from contact_book_api.app.services.contact_service import (
    ContactError,
    ContactNotFoundError,
    ContactService,
    ContactStorageError,
)

router = APIRouter()


def _raise_http(exc: ContactError) -> NoReturn:
    if isinstance(exc, ContactNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ContactStorageError):
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=code, detail=str(exc)) from exc


@router.post("", response_model=ContactMessage, status_code=status.HTTP_201_CREATED)
async def create_contact(
    contact_in: Optional[ContactCreate] = None,
    service: ContactService = Depends(get_contact_service),
) -> ContactMessage:
    """Create a new contact.

    All of ``name``, ``email`` and ``phone`` are required and the
    email must not belong to an existing contact.
    A request without a body is rejected like one with empty fields.
    """
    try:
        contact = await service.create_contact(contact_in or ContactCreate())
    except ContactError as e:
        _raise_http(e)
    return ContactMessage(message="Contact added successfully", contact=contact)


@router.get("", response_model=List[ContactRead])
async def list_contacts(
    service: ContactService = Depends(get_contact_service),
) -> List[ContactRead]:
    """Return all contacts, newest first."""
    try:
        return await service.list_contacts()
    except ContactError as e:
        _raise_http(e)


@router.get("/search", response_model=List[ContactRead])
async def search_contacts(
    query: Optional[str] = Query(None, description="Text to look for in name or email"),
    service: ContactService = Depends(get_contact_service),
) -> List[ContactRead]:
    """Case‑insensitive search by name or email.

    Without a query every contact is returned.
    """
    try:
        return await service.search_contacts(query)
    except ContactError as e:
        _raise_http(e)


@router.put("/{contact_id}", response_model=ContactMessage)
async def update_contact(
    contact_id: int,
    contact_in: Optional[ContactUpdate] = None,
    service: ContactService = Depends(get_contact_service),
) -> ContactMessage:
    """Replace name, email and phone of an existing contact."""
    try:
        contact = await service.update_contact(contact_id, contact_in or ContactUpdate())
    except ContactError as e:
        _raise_http(e)
    return ContactMessage(message="Contact updated successfully", contact=contact)


@router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
) -> MessageResponse:
    """Delete a contact."""
    try:
        await service.delete_contact(contact_id)
    except ContactError as e:
        _raise_http(e)
    return MessageResponse(message="Contact deleted successfully")
