"""
Auth API routes — register, login, profile.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from auth.dependencies import bearer_token, get_auth_service
from auth.schemas import AuthResponse, CredentialsRequest, ProfileResponse
from auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: CredentialsRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user."""
    result = await service.register(req.email, req.password)
    return {
        "success": True,
        "message": "User registered successfully",
        "data": result.to_dict(),
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    req: CredentialsRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    result = await service.login(req.email, req.password)
    return {
        "success": True,
        "message": "Login successful",
        "data": result.to_dict(),
    }


@router.get("/profile", response_model=ProfileResponse)
async def profile(
    token: str = Depends(bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Return the authenticated user."""
    user = await service.profile(token)
    return {"success": True, "data": user}
