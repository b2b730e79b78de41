"""
Google OAuth2 web flow for "Sign in with Google".

Builds the consent URL, protects the round-trip with a signed ``state``
parameter, and turns the callback ``code`` into a ``GoogleProfile``.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import secrets
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Dict, List
from urllib.parse import urlencode

import httpx

from api.exceptions import ExternalServiceError
from auth.exceptions import InvalidStateError
from auth.models import GoogleProfile, ProfileName, ProfileValue
from config.settings import Settings

logger = logging.getLogger(__name__)

# Google OAuth2 endpoints
_GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
_GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
_GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

_STATE_TTL = 600  # seconds


class GoogleOAuthClient:
    """OAuth2 client for Google sign-in."""

    scopes: List[str] = ["openid", "email", "profile"]

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        self._client_id = settings.google_client_id
        self._client_secret = settings.google_client_secret
        self._redirect_uri = settings.google_callback_url
        self._state_secret = settings.oauth_state_secret.encode()
        self._http_client = http_client

    def is_configured(self) -> bool:
        return bool(self._client_id and self._client_secret)

    # ── State token helpers (CSRF protection) ──────────────────────────

    def _state_sig(self, raw: bytes) -> str:
        return hmac.new(self._state_secret, raw, hashlib.sha256).hexdigest()[:16]

    def create_state(self) -> str:
        """Create an opaque state string encoding a nonce + expiry."""
        payload = {"nonce": secrets.token_urlsafe(8), "exp": int(time.time()) + _STATE_TTL}
        raw = json.dumps(payload).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._state_sig(raw)

    def verify_state(self, state: str) -> None:
        """Raise ``InvalidStateError`` unless ``state`` is ours and unexpired."""
        try:
            parts = state.split(".", 1)
            if len(parts) != 2:
                raise ValueError("bad format")
            raw = urlsafe_b64decode(parts[0].encode())
            if not hmac.compare_digest(parts[1], self._state_sig(raw)):
                raise ValueError("bad signature")
            payload = json.loads(raw)
            if payload.get("exp", 0) < time.time():
                raise ValueError("state expired")
        except ValueError as exc:
            raise InvalidStateError(f"Invalid or expired OAuth state: {exc}") from exc

    # ── OAuth flow ─────────────────────────────────────────────────────

    def get_auth_url(self, state: str) -> str:
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "state": state,
        }
        return f"{_GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> GoogleProfile:
        """Exchange the auth code for tokens, then read the user's profile."""
        try:
            if self._http_client is not None:
                user_info = await self._exchange(self._http_client, code)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    user_info = await self._exchange(client, code)
        except httpx.HTTPError as exc:
            logger.error("Google OAuth exchange failed: %s", exc)
            raise ExternalServiceError("Google sign-in failed", service="google") from exc

        return profile_from_userinfo(user_info)

    async def _exchange(self, client: httpx.AsyncClient, code: str) -> Dict[str, Any]:
        # 1. Exchange code for tokens
        token_resp = await client.post(
            _GOOGLE_TOKEN_URL,
            data={
                "code": code,
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "redirect_uri": self._redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        token_resp.raise_for_status()
        token_data = token_resp.json()

        # 2. Fetch user info
        headers = {"Authorization": f"Bearer {token_data['access_token']}"}
        user_resp = await client.get(_GOOGLE_USERINFO_URL, headers=headers)
        user_resp.raise_for_status()
        return user_resp.json()


def profile_from_userinfo(user_info: Dict[str, Any]) -> GoogleProfile:
    """Normalise Google's userinfo payload into a ``GoogleProfile``."""
    if not user_info.get("id"):
        raise ExternalServiceError("Google profile has no account id", service="google")
    email = user_info.get("email")
    picture = user_info.get("picture")
    return GoogleProfile(
        id=str(user_info["id"]),
        emails=[ProfileValue(value=email)] if email else [],
        name=ProfileName(
            given_name=user_info.get("given_name"),
            family_name=user_info.get("family_name"),
        ),
        photos=[ProfileValue(value=picture)] if picture else [],
    )
