"""
Request / response schemas for the auth routes.

Request fields are optional at the schema level so that missing values
reach ``AuthService`` and produce the ``ValidationError`` envelope
instead of a framework 422.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(BaseModel):
    id: str
    email: str
    createdAt: Optional[str] = None


class AuthData(BaseModel):
    user: PublicUser
    token: str


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    data: AuthData


class ProfileResponse(BaseModel):
    success: bool = True
    data: PublicUser
