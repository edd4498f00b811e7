"""Pydantic request/response schemas."""

from app.schemas.auth import (
    Identity,
    IdentityCredentials,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    Profile,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    TokenClaims,
    UsersListResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "Identity",
    "IdentityCredentials",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Profile",
    "ProfileUpdateRequest",
    "ProfileUpdateResponse",
    "RegisterRequest",
    "TokenClaims",
    "UsersListResponse",
]
