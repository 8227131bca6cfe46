"""
Auth orchestration — register, login and profile flows.

Composes the credential store, the password hasher and the token issuer.
Every expected failure is raised as an ``AuthError`` subclass; the HTTP
layer turns those into response envelopes.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from auth.errors import (
    AlreadyExists,
    DuplicateEmail,
    ExpiredToken,
    InvalidCredentials,
    InvalidToken,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from auth.password import PasswordHasher
from auth.store import CredentialStore
from auth.tokens import TokenIssuer
from database.models import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True)
class AuthResult:
    user: Dict[str, Any]
    token: str

    def to_dict(self) -> Dict[str, Any]:
        return {"user": self.user, "token": self.token}


def _require_credentials(email: Any, password: Any) -> tuple[str, str]:
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError("Please provide email and password")
    normalized = normalize_email(email)
    if not normalized or not password:
        raise ValidationError("Please provide email and password")
    return normalized, password


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        # Unknown-email logins verify against this so they cost the same.
        self._dummy_hash = hasher.hash("not-a-real-password")

    async def register(self, email: Any, password: Any) -> AuthResult:
        """Create an account and return it with a fresh token."""
        email, password = _require_credentials(email, password)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        if await self.store.find_by_email(email) is not None:
            logger.info("Registration rejected, email exists: %s", email)
            raise AlreadyExists()

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        try:
            user = await self.store.create(email, password_hash)
        except DuplicateEmail:
            raise AlreadyExists()

        logger.info("Registered user %s (%s)", user.email, user.user_id)
        return self._result(user)

    async def login(self, email: Any, password: Any) -> AuthResult:
        """
        Check credentials and return the user with a fresh token.

        Unknown email and wrong password raise the same
        ``InvalidCredentials`` so responses cannot be used to probe for
        accounts.
        """
        email, password = _require_credentials(email, password)
        user = await self.store.find_by_email(email)

        if user is None:
            await asyncio.to_thread(self.hasher.verify, password, self._dummy_hash)
            logger.info("Login failed, unknown email: %s", email)
            raise InvalidCredentials()

        if not await asyncio.to_thread(self.hasher.verify, password, user.password_hash):
            logger.info("Login failed, wrong password: %s", email)
            raise InvalidCredentials()

        logger.info("Login: %s (%s)", user.email, user.user_id)
        return self._result(user)

    async def profile(self, token: Optional[str]) -> Dict[str, Any]:
        """Resolve a bearer token to the public user record."""
        if not token:
            raise Unauthenticated("Access denied. No token provided.")
        try:
            claims = self.tokens.verify(token)
        except ExpiredToken:
            logger.info("Rejected expired token")
            raise Unauthenticated()
        except InvalidToken as exc:
            logger.warning("Rejected invalid token: %s", exc)
            raise Unauthenticated()

        user = await self.store.find_by_id(claims.sub)
        if user is None:
            raise NotFound()
        return user.to_public()

    # ── internals ──────────────────────────────────────────────────────

    def _result(self, user: User) -> AuthResult:
        token = self.tokens.issue(str(user.user_id), user.email)
        return AuthResult(user=user.to_public(), token=token)
