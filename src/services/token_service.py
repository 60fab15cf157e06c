"""Service layer for signed, time-bound access tokens (JWT)."""
import logging
from datetime import datetime, timedelta, UTC

import jwt

from core.config import Settings

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def create_access_token(
    user_id: int,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user_id: ID of the user the token identifies.
        settings: Provides the signing secret, algorithm and default lifetime.
        expires_delta: Override for the token lifetime.

    Returns:
        The encoded token. It is never stored server-side.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str, settings: Settings) -> int | None:
    """
    Verify a token and return the user ID it was issued for.

    Returns None if the signature does not match, the token is malformed or
    missing a claim, the subject is not a user ID, or the token has expired.
    Expiry is an expected outcome, so nothing is raised.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("access_token_expired")
        return None
    except jwt.PyJWTError as e:
        logger.debug("access_token_invalid: %s", e)
        return None

    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        logger.debug("access_token_invalid_subject")
        return None
