"""
Password hashing with bcrypt.

The stored hash string carries the algorithm tag, cost factor and salt
(``$2b$12$<22-char salt><31-char digest>``), so callers treat it as opaque.
Every failing check performs exactly one bcrypt verification, whether the
password was wrong, the stored hash was malformed, or no account exists.
"""
import logging
from functools import lru_cache

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; longer inputs are rejected at the schema layer
MAX_PASSWORD_BYTES = 72


@lru_cache
def _dummy_hash(rounds: int) -> bytes:
    """Hash used to spend the same CPU time when there is nothing real to compare."""
    return bcrypt.hashpw(b"dummy-password-for-timing", bcrypt.gensalt(rounds=rounds))


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh random salt."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str, rounds: int = 12) -> bool:
    """
    Check a password against a stored bcrypt hash in constant time.

    Returns False (never raises) for a wrong password, an over-long password,
    or a malformed stored hash.
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        # Older bcrypt releases truncate instead of raising
        burn_password_check(password, rounds)
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("password_check_rejected_input")
        burn_password_check(password, rounds)
        return False


def burn_password_check(password: str, rounds: int = 12) -> None:
    """Run a verification against a dummy hash and discard the result."""
    encoded = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
    bcrypt.checkpw(encoded, _dummy_hash(rounds))
