"""
Pydantic schemas for contacts.

A contact consists of a name, an email address and a phone number.
The request schemas declare every field as optional: presence and
email format are checked by ``ContactService`` so that the API can
answer with its own error messages instead of the generic validation
output.  Responses use camelCase timestamp names (``createdAt``,
``updatedAt``) to match what the frontend consumes.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ContactCreate(BaseModel):
    """Schema for creating a contact."""

    name: Optional[str] = Field(None, example="Ann Smith")
    email: Optional[str] = Field(None, example="ann@example.com")
    phone: Optional[str] = Field(None, example="+1 555 0100")


class ContactUpdate(ContactCreate):
    """Schema for replacing a contact.

    Partial updates are not supported; all three fields are required
    exactly as on creation.
    """


class ContactRead(BaseModel):
    """Schema for reading a contact from the API."""

    id: int
    name: str
    email: str
    phone: str
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class ContactMessage(BaseModel):
    """Confirmation returned by create and update."""

    message: str
    contact: ContactRead


class MessageResponse(BaseModel):
    message: str
