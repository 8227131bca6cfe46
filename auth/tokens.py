"""
JWT-style token creation and verification.

Tokens use the compact ``header.payload.signature`` form: base64url
(unpadded) JSON segments signed with HMAC-SHA256.  The secret and the
lifetime are supplied by the caller (``Settings.jwt_secret`` /
``Settings.jwt_expiry_seconds``).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Callable, Dict

from pydantic import BaseModel

from auth.errors import ExpiredToken, InvalidToken

_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenClaims(BaseModel):
    sub: str
    email: str
    iat: int
    exp: int


def _b64encode(raw: bytes) -> str:
    return urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(segment: str) -> bytes:
    return urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _decode_json(segment: str) -> Dict[str, Any]:
    try:
        value = json.loads(_b64decode(segment))
    except (binascii.Error, ValueError) as exc:
        raise InvalidToken(f"undecodable segment: {exc}") from exc
    if not isinstance(value, dict):
        raise InvalidToken("segment is not a JSON object")
    return value


class TokenIssuer:
    """Issue and verify signed bearer tokens carrying user identity claims."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = 604800,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._key = secret.encode()
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _sign(self, signing_input: bytes) -> str:
        return _b64encode(hmac.new(self._key, signing_input, hashlib.sha256).digest())

    def issue(self, user_id: str, email: str) -> str:
        """Create a signed token for ``user_id`` valid for ``ttl_seconds``."""
        issued_at = int(self._clock())
        claims = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        header = _b64encode(json.dumps(_HEADER, separators=(",", ":")).encode())
        payload = _b64encode(json.dumps(claims, separators=(",", ":")).encode())
        signing_input = f"{header}.{payload}"
        return f"{signing_input}.{self._sign(signing_input.encode())}"

    def verify(self, token: str) -> TokenClaims:
        """
        Verify ``token`` and return its claims.

        Raises ``InvalidToken`` for anything structurally wrong or
        wrongly signed, and ``ExpiredToken`` once ``exp`` is reached.
        """
        if not isinstance(token, str):
            raise InvalidToken("token is not a string")
        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidToken("bad format")
        header_seg, payload_seg, signature = parts

        expected_sig = self._sign(f"{header_seg}.{payload_seg}".encode())
        if not hmac.compare_digest(signature.encode(), expected_sig.encode()):
            raise InvalidToken("bad signature")

        header = _decode_json(header_seg)
        if header.get("alg") != _HEADER["alg"]:
            raise InvalidToken(f"unsupported algorithm: {header.get('alg')!r}")

        payload = _decode_json(payload_seg)
        try:
            claims = TokenClaims.model_validate(payload, strict=True)
        except ValueError as exc:
            raise InvalidToken("missing or malformed claims") from exc

        if self._clock() >= claims.exp:
            raise ExpiredToken("token expired")
        return claims
