"""Credential store: persistence access for user accounts."""
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User

# Columns a profile edit is allowed to touch
PROFILE_FIELDS = frozenset({"email", "first_name", "last_name"})


async def find_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by exact (already normalized) email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def find_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Get a user by primary key."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def insert(
    db: AsyncSession,
    email: str,
    password_hash: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """
    Insert a new user and return it with its generated id.

    Raises:
        IntegrityError: If the email is already present (unique constraint).

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    user = User(
        email=email,
        password_hash=password_hash,
        first_name=first_name,
        last_name=last_name,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def update_profile(db: AsyncSession, user: User, fields: dict[str, Any]) -> User:
    """
    Apply profile fields to a user. Keys outside PROFILE_FIELDS are rejected.

    Raises:
        ValueError: If a non-profile column is supplied.
        IntegrityError: If the new email collides with another account.
    """
    unknown = set(fields) - PROFILE_FIELDS
    if unknown:
        raise ValueError(f"Not a profile field: {', '.join(sorted(unknown))}")

    for field, value in fields.items():
        setattr(user, field, value)

    await db.flush()
    await db.refresh(user)
    return user
