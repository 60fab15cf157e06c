"""Pydantic schemas for signup and login."""
from pydantic import BaseModel, EmailStr, field_validator

from schemas.user import UserResponse
from schemas.validators import normalize_email, validate_password


class SignupRequest(BaseModel):
    """Schema for creating an account."""

    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        """Normalize email for storage."""
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        """Require a non-empty password bcrypt can hash."""
        return validate_password(v)


class LoginRequest(BaseModel):
    """
    Schema for logging in.

    Only presence is checked here; anything else that is wrong surfaces as the
    generic invalid-credentials failure.
    """

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        """Normalize email so lookup matches signup."""
        normalized = normalize_email(v)
        if not normalized:
            raise ValueError("Email cannot be empty")
        return normalized

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        """Require a non-empty password."""
        if not v:
            raise ValueError("Password cannot be empty")
        return v


class AuthResponse(BaseModel):
    """
    Response for signup and login.

    access_token goes in the Authorization header as 'Bearer <token>'.
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse
