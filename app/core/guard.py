"""Access guard: authenticate a bearer token, then authorize by role."""

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

from app.core.exceptions import Unauthenticated, Unauthorized
from app.core.security import decode_access_token
from app.models.user import Role
from app.schemas.auth import Identity

if TYPE_CHECKING:
    from app.core.config import Settings
    from app.services.user_store import IdentityStore

logger = logging.getLogger(__name__)


def authenticate(token: str | None, store: "IdentityStore", settings: "Settings") -> Identity:
    """
    Stage 1: verify the bearer token and load its user (without password).

    token is None when the Authorization header is missing or not "Bearer <token>".
    ExpiredTokenError and InvalidTokenError propagate as Unauthenticated subtypes.
    """
    if not token:
        raise Unauthenticated("Unauthorized: No token provided or invalid format.")
    claims = decode_access_token(token, settings)
    identity = store.find_by_id(claims.id)
    if identity is None:
        logger.info("Token for user id=%s refers to a missing user", claims.id)
        raise Unauthenticated("Unauthorized: User not found.")
    return identity


def authorize(identity: Identity | None, allowed_roles: Collection[Role]) -> Identity:
    """Stage 2: require an authenticated identity whose role is in allowed_roles."""
    if identity is None:
        raise Unauthorized("Forbidden: User not authenticated.")
    if identity.role not in allowed_roles:
        raise Unauthorized(
            f"Forbidden: User role '{identity.role.value}' is not authorized to access this route."
        )
    return identity
