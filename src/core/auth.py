"""Authentication module: resolves a bearer access token to the current user."""
import logging
from collections.abc import Awaitable, Callable

from fastapi import Depends, Request, Response
from fastapi.routing import APIRoute
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db import user_store
from db.session import get_async_session
from models.user import User
from services.exceptions import UnauthenticatedError
from services.token_service import verify_access_token

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme; missing or non-Bearer headers yield None instead of a 403
security = HTTPBearer(auto_error=False)


async def authenticate_token(
    db: AsyncSession,
    token: str,
    settings: Settings,
) -> User:
    """
    Resolve an access token to an existing user.

    Raises:
        UnauthenticatedError: If the token is invalid or expired, or its user
            no longer exists.
    """
    user_id = verify_access_token(token, settings)
    if user_id is None:
        raise UnauthenticatedError()

    user = await user_store.find_by_id(db, user_id)
    if user is None:
        logger.info("access_token_for_missing_user", extra={"user_id": user_id})
        raise UnauthenticatedError()

    return user


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency that validates the bearer token and returns the current user.

    Also records the user id on request.state for anything downstream in the
    same request (e.g. log context). Nothing is shared across requests.
    """
    if credentials is None:
        raise UnauthenticatedError()

    user = await authenticate_token(db, credentials.credentials, settings)
    request.state.user_id = user.id
    return user


class BearerAuthRoute(APIRoute):
    """
    Route that rejects a missing, malformed or expired bearer token before the
    request body is read.

    FastAPI parses the JSON body before it resolves dependencies, so without
    this a broken body on a protected route answers 400 instead of 401. The
    user lookup itself still happens in get_current_user.
    """

    def get_route_handler(self) -> Callable[[Request], Awaitable[Response]]:
        """Wrap the default handler with a token check."""
        handler = super().get_route_handler()

        async def authenticated_handler(request: Request) -> Response:
            credentials = await security(request)
            if credentials is None or verify_access_token(
                credentials.credentials, get_settings(),
            ) is None:
                raise UnauthenticatedError()
            return await handler(request)

        return authenticated_handler
