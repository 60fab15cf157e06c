"""Signup and login endpoints. No authentication required."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.config import Settings
from models.user import User
from schemas.auth import AuthResponse, LoginRequest, SignupRequest
from schemas.user import UserResponse
from services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User, token: str, settings: Settings) -> AuthResponse:
    return AuthResponse(
        access_token=token,
        expires_in=settings.access_token_expire_minutes * 60,
        user=UserResponse.model_validate(user),
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    data: SignupRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """
    Create an account and return an access token for it.

    Returns 409 if the email is already registered.
    """
    user, token = await auth_service.signup(db, data, settings)
    return _auth_response(user, token, settings)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """
    Exchange email and password for an access token.

    Returns 403 for an unknown email or a wrong password, without saying which.
    """
    user, token = await auth_service.login(db, data, settings)
    return _auth_response(user, token, settings)
