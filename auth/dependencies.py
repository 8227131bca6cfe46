"""
FastAPI dependencies for authentication.

Provides ``get_auth_service`` (the per-app service built in
``create_app``) and ``bearer_token`` (raw token from the
``Authorization`` header).
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header, Request

from auth.errors import Unauthenticated
from auth.service import AuthService

_BEARER_PREFIX = "bearer "


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def bearer_token(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    """
    Extract the token from ``Authorization: Bearer <token>``.

    Raises ``Unauthenticated`` when the header is absent, uses another
    scheme, or carries no token.
    """
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise Unauthenticated("Access denied. No token provided.")
    token = authorization[len(_BEARER_PREFIX):].strip()
    if not token:
        raise Unauthenticated("Access denied. No token provided.")
    return token
