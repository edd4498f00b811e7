"""Request/response schemas for auth and profile endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.models.user import Role


class RegisterRequest(BaseModel):
    """
    Registration payload. Fields are optional here so that missing values
    reach the service and are reported as a 400 validation error.
    """

    username: str | None = Field(default=None, description="Username (max 32 chars)")
    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class ProfileUpdateRequest(BaseModel):
    """Profile changes; every field is independently optional."""

    username: str | None = None
    email: str | None = None
    password: str | None = Field(default=None, description="New password (min 6 chars)")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class LoginResponse(BaseModel):
    """JWT returned after successful login."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT session token; send as Authorization: Bearer <token>")


class Identity(BaseModel):
    """A user record without its password hash."""

    id: int
    username: str
    email: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class IdentityCredentials(Identity):
    """A user record including the stored password hash (login only)."""

    password: str


class Profile(BaseModel):
    """Public projection of an identity."""

    id: int
    username: str
    email: str
    role: Role

    class Config:
        from_attributes = True


class ProfileUpdateResponse(BaseModel):
    """Response for PUT /profile."""

    message: str = "Profile updated successfully!"
    user: Profile


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    count: int
    users: list[Identity]


class TokenClaims(BaseModel):
    """Claims carried by a session token."""

    id: int
    username: str
    email: str
    role: Role
    iat: datetime
    exp: datetime
