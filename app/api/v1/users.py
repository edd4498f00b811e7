"""Profile endpoints for the current user and the admin-only user listing."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.auth import get_account_service, get_current_user, require_admin
from app.schemas.auth import (
    Identity,
    MessageResponse,
    Profile,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    UsersListResponse,
)
from app.services.accounts import AccountService

router = APIRouter()


@router.get("/profile", response_model=Profile)
def get_profile(
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> Profile:
    """Return id, username, email and role of the authenticated user."""
    return service.get_profile(current_user)


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> ProfileUpdateResponse:
    """
    Update username, email and/or password of the authenticated user.
    Omitted fields are left unchanged; a new password needs at least 6 characters.
    """
    profile = service.update_profile(
        current_user,
        username=body.username,
        email=body.email,
        password=body.password,
    )
    return ProfileUpdateResponse(user=profile)


@router.delete("/profile", response_model=MessageResponse)
def delete_profile(
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> MessageResponse:
    service.delete_profile(current_user)
    return MessageResponse(message="Profile deleted successfully!")


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[Identity, Depends(require_admin)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> UsersListResponse:
    """List all users (admin only). Password hashes are never included."""
    users = service.list_all()
    return UsersListResponse(count=len(users), users=users)
