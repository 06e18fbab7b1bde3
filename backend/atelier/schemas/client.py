"""
Client Pydantic schemas for API validation.
"""

import re
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def _check_email(value: Optional[str]) -> Optional[str]:
    if value and not EMAIL_PATTERN.search(value):
        raise ValueError("invalid email format")
    return value


class ClientBase(BaseModel):
    """Base client schema."""
    name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field("", max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return _check_email(value)


class ClientCreate(ClientBase):
    """Schema for creating a client."""
    pass


class ClientUpdate(BaseModel):
    """Schema for updating a client."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return _check_email(value)


class ClientResponse(ClientBase):
    """Schema for client response."""
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


class ClientList(BaseModel):
    """Schema for listing clients."""
    items: list[ClientResponse]
    total: int
