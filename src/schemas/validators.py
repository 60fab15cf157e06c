"""
Shared validation functions for Pydantic schemas.

Used by the auth, user and bookmark schemas so the rules stay identical across
create and update payloads.
"""
from core.security import MAX_PASSWORD_BYTES

MAX_TITLE_LENGTH = 500
MAX_DESCRIPTION_LENGTH = 2000
MAX_NAME_LENGTH = 100


def normalize_email(email: str) -> str:
    """
    Normalize an email for storage and lookup: trimmed and lowercased.

    Applied everywhere an email enters the system, so 'Me@X.com' and 'me@x.com'
    are the same account.
    """
    return email.strip().lower()


def validate_password(password: str) -> str:
    """Reject empty passwords and passwords bcrypt cannot hash in full."""
    if not password:
        raise ValueError("Password cannot be empty")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
    return password


def validate_title(title: str | None) -> str:
    """Strip a bookmark title and reject empty or null values."""
    if title is None:
        raise ValueError("Title cannot be null")
    stripped = title.strip()
    if not stripped:
        raise ValueError("Title cannot be empty")
    if len(stripped) > MAX_TITLE_LENGTH:
        raise ValueError(f"Title cannot exceed {MAX_TITLE_LENGTH} characters")
    return stripped
