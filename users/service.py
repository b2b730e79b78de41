"""
User administration — list, read, edit, delete, (de)activate.

Every result is a ``PublicUser``; password hashes never leave this layer.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from api.exceptions import ConflictError, NotFoundError, ValidationError
from auth.models import PublicUser, User
from auth.store import UserStore

logger = logging.getLogger(__name__)


def _not_found(user_id: int) -> NotFoundError:
    return NotFoundError(f"User with ID {user_id} not found", details={"user_id": user_id})


class UsersService:
    def __init__(self, store: UserStore):
        self._store = store

    async def find_all(self) -> List[PublicUser]:
        return [PublicUser.model_validate(u) for u in await self._store.list_all()]

    async def find_one(self, user_id: int) -> PublicUser:
        user = await self._store.get_by_id(user_id)
        if user is None:
            raise _not_found(user_id)
        return PublicUser.model_validate(user)

    async def update(self, user_id: int, fields: Dict[str, Any]) -> PublicUser:
        """Apply a partial update. ``fields`` holds only what the caller sent."""
        if "email" in fields and fields["email"] is None:
            raise ValidationError("Email cannot be null")
        email = fields.get("email")
        if email is not None:
            holder = await self._store.get_by_email(email)
            if holder is not None and holder.id != user_id:
                raise ConflictError("Email already in use", code="EMAIL_TAKEN")
        return await self._write(user_id, **fields)

    async def remove(self, user_id: int) -> None:
        if not await self._store.delete(user_id):
            raise _not_found(user_id)
        logger.info("Deleted user %s", user_id)

    async def deactivate(self, user_id: int) -> PublicUser:
        return await self._write(user_id, is_active=False)

    async def activate(self, user_id: int) -> PublicUser:
        return await self._write(user_id, is_active=True)

    async def _write(self, user_id: int, **fields: Any) -> PublicUser:
        user: User | None = await self._store.update(user_id, **fields)
        if user is None:
            raise _not_found(user_id)
        return PublicUser.model_validate(user)
