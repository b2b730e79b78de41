"""
Auth service — credential validation, token issuance, Google account
linking and password rotation.

Pure business logic with no HTTP dependencies. Raises domain errors that
``api.middleware`` maps to HTTP status codes.
"""

from __future__ import annotations

import logging
from typing import Optional

from api.exceptions import ConflictError
from auth.exceptions import InvalidCredentialsError, InvalidProfileError
from auth.jwt import TokenIssuer
from auth.models import AuthResponse, GoogleProfile, PublicUser, User
from auth.password import PasswordHasher
from auth.store import UserStore

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates the credential store, the hasher and the token issuer."""

    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenIssuer):
        self._store = store
        self._hasher = hasher
        self._tokens = tokens

    async def validate_credentials(self, email: str, password: str) -> Optional[User]:
        """
        Return the user owning ``email`` if ``password`` matches, else None.

        Unknown email, password-less account and wrong password all give the
        same answer so callers cannot leak which accounts exist.
        """
        user = await self._store.get_by_email(email)
        if user is None or not user.password_hash:
            return None
        if not self._hasher.verify(password, user.password_hash):
            return None
        return user

    async def authenticate(self, email: str, password: str) -> AuthResponse:
        """validate_credentials + login, raising on a failed match."""
        user = await self.validate_credentials(email, password)
        if user is None:
            raise InvalidCredentialsError()
        logger.info("Login: %s (%s)", user.email, user.id)
        return self.login(user)

    def login(self, user: User) -> AuthResponse:
        """Mint a token for an already-validated user."""
        claims = {
            "sub": user.id,
            "email": user.email,
            "firstName": user.first_name,
            "lastName": user.last_name,
        }
        return AuthResponse(
            access_token=self._tokens.sign(claims),
            user=self.get_profile(user),
        )

    async def register(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> AuthResponse:
        if await self._store.get_by_email(email) is not None:
            raise ConflictError("User already exists", code="USER_EXISTS")

        user = await self._store.insert(
            email=email,
            password_hash=self._hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
        )
        logger.info("Registered user %s (%s)", user.email, user.id)
        return self.login(user)

    async def third_party_login(self, profile: GoogleProfile) -> AuthResponse:
        """
        Log in a Google user, linking or creating the local account.

        Lookup priority: Google id first, then primary email. A password
        account with the same email gets the Google id attached instead of
        a second row being created.
        """
        email = profile.primary_email
        if not email:
            raise InvalidProfileError("Google profile has no email address")

        user = await self._store.get_by_google_id(profile.id)
        if user is None:
            existing = await self._store.get_by_email(email)
            if existing is not None:
                fields = {"google_id": profile.id}
                if profile.photo:
                    fields["avatar"] = profile.photo
                user = await self._store.update(existing.id, **fields)
                logger.info("Linked Google account %s to user %s", profile.id, user.id)
            else:
                user = await self._store.insert(
                    email=email,
                    google_id=profile.id,
                    first_name=profile.name.given_name,
                    last_name=profile.name.family_name,
                    avatar=profile.photo,
                )
                logger.info("Created user %s from Google account %s", user.id, profile.id)

        return self.login(user)

    async def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = await self._store.get_by_id(user_id)
        if user is None or not user.password_hash:
            raise InvalidCredentialsError("User not found or no password set")

        if not self._hasher.verify(current_password, user.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")

        await self._store.update(user_id, password_hash=self._hasher.hash(new_password))
        logger.info("Password changed for user %s", user_id)

    @staticmethod
    def get_profile(user: User) -> PublicUser:
        """Project a user row to its public form (no password hash)."""
        return PublicUser.model_validate(user)
