"""
Error taxonomy for the auth flows.

``AuthError`` subclasses are the failures callers see; each carries the
HTTP status and the message rendered into the response envelope.
``DuplicateEmail`` and ``TokenError`` are raised by the store and the
token verifier and are translated by ``AuthService``.
"""

from __future__ import annotations

from fastapi import status


class AuthError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Please provide email and password"


class AlreadyExists(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists with this email"


class InvalidCredentials(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class Unauthenticated(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class NotFound(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class InternalError(AuthError):
    pass


# ── Component-level failures ───────────────────────────────────────────


class DuplicateEmail(Exception):
    """A user with this email is already stored."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"email already registered: {email}")


class TokenError(Exception):
    pass


class InvalidToken(TokenError):
    pass


class ExpiredToken(TokenError):
    pass
