"""Bookmark store: persistence access for bookmarks, always filtered by owner."""
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark

EDITABLE_FIELDS = frozenset({"title", "link", "description"})


async def insert(
    db: AsyncSession,
    user_id: int,
    title: str,
    link: str,
    description: str | None = None,
) -> Bookmark:
    """
    Insert a bookmark for a user and return it with its generated id.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(
        user_id=user_id,
        title=title,
        link=link,
        description=description,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def find_all_by_owner(
    db: AsyncSession,
    user_id: int,
    offset: int = 0,
    limit: int | None = None,
) -> list[Bookmark]:
    """Get a user's bookmarks in insertion order."""
    query = (
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id.asc())
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def find_by_id_and_owner(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark | None:
    """Get a bookmark by ID, scoped to user. Returns None if not found or wrong user."""
    result = await db.execute(
        select(Bookmark).where(
            Bookmark.id == bookmark_id,
            Bookmark.user_id == user_id,
        ),
    )
    return result.scalar_one_or_none()


async def update(db: AsyncSession, bookmark: Bookmark, fields: dict[str, Any]) -> Bookmark:
    """
    Apply a partial set of fields to a bookmark already loaded for its owner.

    Raises:
        ValueError: If a non-editable column is supplied.
    """
    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Not an editable bookmark field: {', '.join(sorted(unknown))}")

    for field, value in fields.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete(db: AsyncSession, bookmark: Bookmark) -> None:
    """
    Permanently delete a bookmark already loaded for its owner.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    await db.delete(bookmark)
    await db.flush()
