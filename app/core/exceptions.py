"""Error taxonomy for the account service; each error knows its HTTP status."""

from fastapi import status

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AuthServiceError(Exception):
    """Base class for errors the API layer maps to a JSON response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def client_message(self) -> str:
        """Message safe to return to the client."""
        return self.message


class ValidationError(AuthServiceError):
    """Missing or malformed client input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AuthServiceError):
    """Username or email uniqueness violation."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentialsError(AuthServiceError):
    """
    Login failed. The client always sees the same message; ``reason`` says
    whether the user was unknown or the password wrong and is only logged.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__("Invalid credentials")


class Unauthenticated(AuthServiceError):
    """No usable token, or the token's user no longer exists."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ExpiredTokenError(Unauthenticated):
    """Token signature is valid but the token is past its expiry."""

    def __init__(self, message: str = "Unauthorized: Token has expired.") -> None:
        super().__init__(message)


class InvalidTokenError(Unauthenticated):
    """Token signature, structure or claims are invalid."""

    def __init__(self, message: str = "Unauthorized: Invalid token.") -> None:
        super().__init__(message)


class Unauthorized(AuthServiceError):
    """Authenticated, but the role is not allowed for this operation."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AuthServiceError):
    """Target record does not exist (or vanished concurrently)."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AuthServiceError):
    """Server-side failure; details are logged, never returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    @property
    def client_message(self) -> str:
        return INTERNAL_ERROR_MESSAGE


class ConfigurationError(InternalError):
    """Required configuration (e.g. JWT_SECRET) is missing."""


class HashingError(InternalError):
    """The password hashing primitive failed."""


class VerificationError(InternalError):
    """The password comparison primitive failed (not a plain mismatch)."""
