"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import Field, HttpUrl, field_validator

from schemas.base import ApiModel
from schemas.validators import MAX_DESCRIPTION_LENGTH, validate_title


class BookmarkCreate(ApiModel):
    """Schema for creating a new bookmark."""

    title: str
    # HttpUrl normalizes root domains with trailing slash (example.com -> example.com/)
    # but preserves paths as-is (example.com/page stays example.com/page)
    link: HttpUrl
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        """Strip and require a non-empty title."""
        return validate_title(v)


class BookmarkUpdate(ApiModel):
    """
    Schema for partially updating a bookmark.

    Only fields present in the request body are applied. title and link may be
    omitted but not set to null; description may be set to null to clear it.
    """

    title: str | None = None
    link: HttpUrl | None = None
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str:
        """Strip and require a non-empty title when one is supplied."""
        return validate_title(v)

    @field_validator("link")
    @classmethod
    def check_link(cls, v: HttpUrl | None) -> HttpUrl:
        """Reject an explicit null link."""
        if v is None:
            raise ValueError("Link cannot be null")
        return v


class BookmarkResponse(ApiModel):
    """Schema for bookmark responses."""

    id: int
    user_id: int
    title: str
    link: str
    description: str | None
    created_at: datetime
    updated_at: datetime
