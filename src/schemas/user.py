"""Pydantic schemas for user profile endpoints."""
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from schemas.base import ApiModel
from schemas.validators import MAX_NAME_LENGTH, normalize_email


class UserUpdate(ApiModel):
    """Schema for editing the current user's profile. All fields optional."""

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    last_name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str:
        """Normalize the email; an account cannot drop its email."""
        if v is None:
            raise ValueError("Email cannot be null")
        return normalize_email(v)


class UserResponse(ApiModel):
    """Response model for user info. Never includes the password hash."""

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime
