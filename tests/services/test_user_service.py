"""Tests for the user profile service functions."""
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from db import user_store
from models.user import User
from schemas.user import UserUpdate
from services import user_service
from services.exceptions import EmailTakenError, UnauthenticatedError


async def test_get_user(db_session: AsyncSession, user_a: User) -> None:
    """Existing users are returned by id."""
    assert (await user_service.get_user(db_session, user_a.id)).email == user_a.email


async def test_get_missing_user(db_session: AsyncSession) -> None:
    """A missing user is an authentication failure, not a 404."""
    with pytest.raises(UnauthenticatedError):
        await user_service.get_user(db_session, 12345)


async def test_update_only_supplied_fields(db_session: AsyncSession, user_a: User) -> None:
    """Unset fields are not overwritten with None."""
    await user_service.update_user(db_session, user_a, UserUpdate(first_name="Ada"))
    updated = await user_service.update_user(db_session, user_a, UserUpdate(last_name="L"))

    assert updated.first_name == "Ada"
    assert updated.last_name == "L"
    assert updated.email == "user-a@test.com"


async def test_update_can_clear_names(db_session: AsyncSession, user_a: User) -> None:
    """An explicit null clears a name."""
    await user_service.update_user(db_session, user_a, UserUpdate(first_name="Ada"))
    updated = await user_service.update_user(db_session, user_a, UserUpdate(first_name=None))
    assert updated.first_name is None


async def test_update_email_conflict(
    db_session: AsyncSession,
    user_a: User,
    user_b: User,
) -> None:
    """Taking another account's email raises EmailTakenError and changes nothing."""
    with pytest.raises(EmailTakenError):
        await user_service.update_user(
            db_session, user_a, UserUpdate(email="USER-B@test.com"),
        )
    assert user_a.email == "user-a@test.com"


async def test_update_with_empty_payload_is_noop(db_session: AsyncSession, user_a: User) -> None:
    """No fields means no write."""
    updated = await user_service.update_user(db_session, user_a, UserUpdate())
    assert updated is user_a


async def test_update_email_conflict_detected_at_insert_time(
    db_session: AsyncSession,
    user_a: User,
    user_b: User,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A conflict the pre-check missed is caught by the unique index."""
    # Simulate a concurrent writer taking the email after the lookup
    monkeypatch.setattr(user_store, "find_by_email", AsyncMock(return_value=None))

    with pytest.raises(EmailTakenError):
        await user_service.update_user(db_session, user_a, UserUpdate(email=user_b.email))
