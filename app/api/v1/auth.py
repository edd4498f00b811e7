"""Registration, login and auth dependencies (get_current_user, RequireRoles)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.guard import authenticate, authorize
from app.models.user import Role
from app.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from app.services.accounts import AccountService
from app.services.user_store import UserStore

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Dependency: settings the app was created with."""
    return request.app.state.settings


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_account_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AccountService:
    return AccountService(store, settings)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[UserStore, Depends(get_user_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Identity:
    """Dependency: require a valid Bearer JWT and return the current user. Raises 401 otherwise."""
    token = credentials.credentials if credentials is not None else None
    return authenticate(token, store, settings)


class RequireRoles:
    """
    Dependency: require the current user's role to be one of a fixed set.
    Raises 403 for other roles. Build one instance per protected route.
    """

    def __init__(self, *roles: Role) -> None:
        self.allowed_roles = frozenset(roles)

    def __call__(
        self,
        current_user: Annotated[Identity, Depends(get_current_user)],
    ) -> Identity:
        return authorize(current_user, self.allowed_roles)


require_admin = RequireRoles(Role.ADMIN)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> MessageResponse:
    """
    Create an account with role 'user'. Does not log the user in;
    call POST /login afterwards to obtain a token.
    """
    service.register(body.username, body.email, body.password)
    return MessageResponse(message="User registered successfully!")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT session token.
    Include the token in the Authorization header as: Bearer <token>
    """
    token = service.login(body.username, body.password)
    return LoginResponse(token=token)
