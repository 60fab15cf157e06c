"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from db import bookmark_store
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import BookmarkNotFoundError, InvalidInputError

logger = logging.getLogger(__name__)


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark owned by user_id.

    Raises:
        InvalidInputError: If title or link is empty.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    title = (data.title or "").strip()
    link = str(data.link) if data.link is not None else ""
    if not title:
        raise InvalidInputError("Title is required")
    if not link:
        raise InvalidInputError("Link is required")

    bookmark = await bookmark_store.insert(
        db,
        user_id=user_id,
        title=title,
        link=link,
        description=data.description,
    )
    logger.info("bookmark_created", extra={"user_id": user_id, "bookmark_id": bookmark.id})
    return bookmark


async def get_bookmarks(
    db: AsyncSession,
    user_id: int,
    offset: int = 0,
    limit: int | None = None,
) -> list[Bookmark]:
    """Get all bookmarks for a user in insertion order. Empty list if none."""
    return await bookmark_store.find_all_by_owner(db, user_id, offset=offset, limit=limit)


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark:
    """
    Get a bookmark by ID, scoped to user.

    Raises:
        BookmarkNotFoundError: If the bookmark does not exist or belongs to
            another user. Both cases are the same failure.
    """
    bookmark = await bookmark_store.find_by_id_and_owner(db, user_id, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Apply a partial update. Fields absent from the payload keep their values.

    Raises:
        BookmarkNotFoundError: If not found or owned by another user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)

    # mode="json" turns HttpUrl into its string form
    update_data = data.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        return bookmark

    return await bookmark_store.update(db, bookmark, update_data)


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> None:
    """
    Permanently delete a bookmark.

    Raises:
        BookmarkNotFoundError: If not found or owned by another user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    await bookmark_store.delete(db, bookmark)
    logger.info("bookmark_deleted", extra={"user_id": user_id, "bookmark_id": bookmark_id})
