"""
Auth API routes — login, register, Google sign-in, profile, password change.

Route prefix: /api/auth
"""

from __future__ import annotations

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse

from api.schemas import MessageResponse
from auth.dependencies import get_auth_service, get_current_user, get_google_client
from auth.google import GoogleOAuthClient
from auth.models import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    PublicUser,
    RegisterRequest,
    User,
)
from auth.service import AuthService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Login with email + password."""
    return await service.authenticate(req.email, req.password)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user and log them in."""
    return await service.register(
        email=req.email,
        password=req.password,
        first_name=req.first_name,
        last_name=req.last_name,
    )


@router.get("/google")
async def google_auth(
    google: GoogleOAuthClient = Depends(get_google_client),
) -> RedirectResponse:
    """Start the Google OAuth flow by redirecting to the consent screen."""
    return RedirectResponse(google.get_auth_url(google.create_state()))


@router.get("/google/callback")
async def google_auth_callback(
    request: Request,
    code: str = Query(...),
    state: str = Query(...),
    google: GoogleOAuthClient = Depends(get_google_client),
    service: AuthService = Depends(get_auth_service),
) -> RedirectResponse:
    """
    OAuth callback — Google redirects here after consent.

    Signs the user in (linking or creating the account) and hands the
    token to the frontend as a query parameter.
    """
    google.verify_state(state)
    profile = await google.fetch_profile(code)
    result = await service.third_party_login(profile)

    success_url = request.app.state.settings.oauth_success_url
    return RedirectResponse(f"{success_url}?{urlencode({'token': result.access_token})}")


@router.get("/profile", response_model=PublicUser)
async def get_profile(user: User = Depends(get_current_user)) -> PublicUser:
    """Current user's profile."""
    return AuthService.get_profile(user)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    req: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Rotate the caller's password. Existing tokens stay valid."""
    await service.change_password(user.id, req.current_password, req.new_password)
    return MessageResponse(message="Password changed successfully")
