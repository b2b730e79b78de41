"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256.
The secret and lifetime come from ``config.jwt_secret`` and
``config.jwt_expiry_seconds`` (env vars: ``JWT_SECRET``,
``JWT_EXPIRY_SECONDS``). Nothing is stored server-side: a token stays
valid until it expires.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Dict, Optional

from pydantic import ValidationError

from auth.exceptions import ExpiredTokenError, InvalidTokenError
from auth.models import TokenClaims


class TokenIssuer:
    """Signs and verifies bearer tokens with a process-wide secret."""

    def __init__(self, secret: str, expiry_seconds: int):
        if expiry_seconds <= 0:
            raise ValueError("Token lifetime must be positive")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def sign(self, claims: Dict[str, Any], now: Optional[int] = None) -> str:
        """Create a signed token carrying ``claims`` plus ``iat`` / ``exp``."""
        issued_at = int(time.time()) if now is None else now
        payload = {
            **claims,
            "iat": issued_at,
            "exp": issued_at + self.expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify token and return its claims.

        Raises ``InvalidTokenError`` on a malformed or tampered token and
        ``ExpiredTokenError`` once ``exp`` has passed.
        """
        parts = token.split(".", 1)
        if len(parts) != 2:
            raise InvalidTokenError("bad format")
        try:
            raw = urlsafe_b64decode(parts[0].encode())
        except ValueError as exc:
            raise InvalidTokenError(f"bad encoding: {exc}") from exc
        if not hmac.compare_digest(parts[1], self._sign(raw)):
            raise InvalidTokenError("bad signature")

        try:
            claims = TokenClaims.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as exc:
            raise InvalidTokenError(f"bad payload: {exc}") from exc

        if claims.exp <= time.time():
            raise ExpiredTokenError()
        return claims
