"""Password hashing and JWT creation/verification for authentication."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError as PydanticValidationError

from app.core.durations import parse_duration
from app.core.exceptions import (
    ConfigurationError,
    ExpiredTokenError,
    HashingError,
    InvalidTokenError,
    VerificationError,
)
from app.schemas.auth import Identity, TokenClaims

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

PASSWORD_MIN_LEN = 6


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    try:
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")
    except (ValueError, TypeError, AttributeError) as e:
        logger.error("Password hashing failed: %s", e)
        raise HashingError("Failed to hash password.") from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False on mismatch; raises VerificationError when the stored value
    cannot be compared at all (corrupt hash, wrong type).
    """
    try:
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError) as e:
        logger.error("Password verification failed: %s", e)
        raise VerificationError("Error validating password during comparison.") from e


def _signing_secret(settings: "Settings") -> str:
    if settings.JWT_SECRET is None:
        logger.error("Configuration error: JWT_SECRET is not set.")
        raise ConfigurationError("Server configuration error: JWT secret is missing.")
    return settings.JWT_SECRET.get_secret_value()


def create_access_token(
    identity: Identity,
    settings: "Settings",
    now: datetime | None = None,
) -> str:
    """Create a JWT carrying id, username, email and role, expiring after JWT_EXPIRATION."""
    secret = _signing_secret(settings)
    issued_at = now or datetime.now(UTC)
    expire = issued_at + parse_duration(settings.JWT_EXPIRATION)
    payload: dict[str, Any] = {
        "id": identity.id,
        "username": identity.username,
        "email": identity.email,
        "role": identity.role.value,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: "Settings") -> TokenClaims:
    """
    Decode and validate a JWT; return its claims.
    Raises ExpiredTokenError past expiry and InvalidTokenError for anything else wrong.
    """
    secret = _signing_secret(settings)
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredTokenError() from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e
    try:
        return TokenClaims.model_validate(payload)
    except PydanticValidationError as e:
        raise InvalidTokenError("Unauthorized: Invalid token payload.") from e
