"""Pydantic schemas for the contact form and admin inbox."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class ContactCreate(BaseModel):
    """Public contact form submission."""

    name: str = Field(min_length=2, max_length=200)
    email: EmailStr
    message: str = Field(min_length=10, max_length=10_000)

    @field_validator("name", "message", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class ContactSubmitResponse(BaseModel):
    success: bool
    message: str


class ContactMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    message: str
    created_at: datetime
