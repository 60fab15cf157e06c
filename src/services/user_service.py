"""Service layer for user profile reads and edits."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db import user_store
from models.user import User
from schemas.user import UserUpdate
from services.exceptions import EmailTakenError, UnauthenticatedError

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> User:
    """
    Get a user by ID.

    Raises:
        UnauthenticatedError: If the user does not exist (only reachable with a
            token for a deleted account).
    """
    user = await user_store.find_by_id(db, user_id)
    if user is None:
        raise UnauthenticatedError()
    return user


async def update_user(db: AsyncSession, user: User, data: UserUpdate) -> User:
    """
    Apply a partial profile edit to the given user.

    Only fields present in the request are changed.

    Raises:
        EmailTakenError: If the new email belongs to another account.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        return user

    new_email = fields.get("email")
    if new_email is not None and new_email != user.email:
        existing = await user_store.find_by_email(db, new_email)
        if existing is not None and existing.id != user.id:
            raise EmailTakenError()

    try:
        user = await user_store.update_profile(db, user, fields)
    except IntegrityError:
        await db.rollback()
        raise EmailTakenError()

    logger.info(
        "user_profile_updated",
        extra={"user_id": user.id, "fields": sorted(fields)},
    )
    return user
