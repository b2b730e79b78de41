"""
FastAPI dependencies for authentication.

Provides the auth service wiring and the ``get_current_user`` guard that
every protected route depends on: verify the bearer token, then resolve
the user it names.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from api.exceptions import ServiceUnavailableError
from auth.exceptions import InvalidTokenError, MissingTokenError
from auth.google import GoogleOAuthClient
from auth.models import User
from auth.service import AuthService
from auth.store import UserStore
from database.session import get_db_session

_bearer_scheme = HTTPBearer(auto_error=False)


def get_user_store(session: AsyncSession = Depends(get_db_session)) -> UserStore:
    return UserStore(session)


def get_auth_service(
    request: Request,
    store: UserStore = Depends(get_user_store),
) -> AuthService:
    state = request.app.state
    return AuthService(store, state.password_hasher, state.token_issuer)


def get_google_client(request: Request) -> GoogleOAuthClient:
    client: GoogleOAuthClient = request.app.state.google_client
    if not client.is_configured():
        raise ServiceUnavailableError("Google sign-in is not configured")
    return client


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    store: UserStore = Depends(get_user_store),
) -> User:
    """
    Extract and verify the Bearer token, returning the user it was issued
    to. A token for a deleted user is rejected like a forged one.
    """
    if credentials is None:
        raise MissingTokenError()

    claims = request.app.state.token_issuer.verify(credentials.credentials)
    user = await store.get_by_id(claims.sub)
    if user is None:
        raise InvalidTokenError(f"token subject {claims.sub} no longer exists")
    return user
