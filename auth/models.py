"""
Request / response schemas and token claims for the auth module.

The ``User`` ORM model is re-exported from the database package for use
in authentication-related code.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.networks import validate_email

from api.schemas import CamelModel, RequestModel
from database.models import User

__all__ = [
    "AuthResponse",
    "ChangePasswordRequest",
    "Email",
    "GoogleProfile",
    "LoginRequest",
    "ProfileName",
    "ProfileValue",
    "PublicUser",
    "RegisterRequest",
    "TokenClaims",
    "User",
]


def _check_email(value: str) -> str:
    # Stored exactly as typed; login and linking compare the raw string.
    _, normalized = validate_email(value)
    if normalized.lower() != value.lower():
        raise ValueError("value is not a bare email address")
    return value


Email = Annotated[str, AfterValidator(_check_email)]


# ── Users ──────────────────────────────────────────────────────────────


class PublicUser(CamelModel):
    """A user row without its password hash."""

    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    google_id: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TokenClaims(CamelModel):
    sub: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    iat: int
    exp: int


class AuthResponse(BaseModel):
    access_token: str
    user: PublicUser


# ── Request bodies ─────────────────────────────────────────────────────


class LoginRequest(RequestModel):
    # No format rules: any credential that cannot match is a plain 401.
    model_config = ConfigDict(extra="ignore")

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(RequestModel):
    email: Email
    password: str = Field(..., min_length=6, max_length=50)
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)


class ChangePasswordRequest(RequestModel):
    current_password: str = Field(..., min_length=6)
    new_password: str = Field(..., min_length=6, max_length=50)


# ── Third-party profile ────────────────────────────────────────────────


class ProfileValue(BaseModel):
    value: str


class ProfileName(CamelModel):
    given_name: Optional[str] = None
    family_name: Optional[str] = None


class GoogleProfile(BaseModel):
    """Provider profile in the shape the auth service consumes."""

    id: str
    emails: List[ProfileValue] = Field(default_factory=list)
    name: ProfileName = Field(default_factory=ProfileName)
    photos: List[ProfileValue] = Field(default_factory=list)

    @property
    def primary_email(self) -> Optional[str]:
        return self.emails[0].value if self.emails else None

    @property
    def photo(self) -> Optional[str]:
        return self.photos[0].value if self.photos else None
