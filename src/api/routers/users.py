"""Current-user profile endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from core.auth import BearerAuthRoute
from models.user import User
from schemas.user import UserResponse, UserUpdate
from services import user_service


router = APIRouter(prefix="/users", tags=["users"], route_class=BearerAuthRoute)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Get the current authenticated user's info."""
    return await user_service.get_user(db, current_user.id)


@router.patch("", response_model=UserResponse)
@router.patch("/", response_model=UserResponse, include_in_schema=False)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Edit the current user's profile (firstName, lastName, email)."""
    return await user_service.update_user(db, current_user, data)
