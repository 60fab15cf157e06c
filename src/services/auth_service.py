"""Service layer for signup and login."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import burn_password_check, hash_password, verify_password
from db import user_store
from models.user import User
from schemas.auth import LoginRequest, SignupRequest
from schemas.validators import normalize_email
from services.exceptions import EmailTakenError, InvalidCredentialsError, InvalidInputError
from services.token_service import create_access_token

logger = logging.getLogger(__name__)


def _require_credentials(email: str, password: str) -> str:
    """Re-check credentials that bypassed the request schemas. Returns the normalized email."""
    normalized = normalize_email(email or "")
    if not normalized or "@" not in normalized:
        raise InvalidInputError("A valid email is required")
    if not password:
        raise InvalidInputError("Password is required")
    return normalized


async def signup(
    db: AsyncSession,
    data: SignupRequest,
    settings: Settings,
) -> tuple[User, str]:
    """
    Register a new account and issue its first access token.

    Returns:
        Tuple of (User, access_token).

    Raises:
        InvalidInputError: If email or password is empty or malformed.
        EmailTakenError: If the email already belongs to an account.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    email = _require_credentials(data.email, data.password)

    if await user_store.find_by_email(db, email) is not None:
        raise EmailTakenError()

    password_hash = hash_password(data.password, settings.bcrypt_rounds)
    try:
        user = await user_store.insert(db, email=email, password_hash=password_hash)
    except IntegrityError:
        # Race condition: a concurrent signup inserted the same email between
        # our SELECT and INSERT.
        await db.rollback()
        raise EmailTakenError()

    logger.info("user_signed_up", extra={"user_id": user.id})
    return user, create_access_token(user.id, settings)


async def login(
    db: AsyncSession,
    data: LoginRequest,
    settings: Settings,
) -> tuple[User, str]:
    """
    Check credentials and issue an access token.

    An unknown email and a wrong password raise the same InvalidCredentialsError,
    log the same event, and both cost one bcrypt verification.

    Returns:
        Tuple of (User, access_token).

    Raises:
        InvalidInputError: If email or password is empty.
        InvalidCredentialsError: If the credentials do not match an account.
    """
    email = _require_credentials(data.email, data.password)

    user = await user_store.find_by_email(db, email)
    if user is None:
        burn_password_check(data.password, settings.bcrypt_rounds)
        verified = False
    else:
        verified = verify_password(data.password, user.password_hash, settings.bcrypt_rounds)

    if user is None or not verified:
        logger.info("login_failed")
        raise InvalidCredentialsError()

    logger.info("user_logged_in", extra={"user_id": user.id})
    return user, create_access_token(user.id, settings)
