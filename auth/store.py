"""
Credential store — keyed lookups and single-row writes on ``users``.

Each method is one round-trip on the request's session. Writes are
flushed immediately so the returned row carries database-assigned
values; the surrounding ``get_db_session`` dependency commits.
"""

from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User, utcnow


class UserStore:
    """Persistence operations on user rows."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_google_id(self, google_id: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.google_id == google_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[User]:
        result = await self._session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def insert(self, **fields: Any) -> User:
        """Insert a new user row and return it with its assigned id."""
        user = User(is_active=True, **fields)
        self._session.add(user)
        await self._session.flush()
        await self._session.refresh(user)
        return user

    async def update(self, user_id: int, **fields: Any) -> Optional[User]:
        """
        Set ``fields`` on the row and bump ``updated_at``.

        Returns the row as stored after the write, or ``None`` if no user
        has that id.
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        for name, value in fields.items():
            setattr(user, name, value)
        user.updated_at = utcnow()
        await self._session.flush()
        await self._session.refresh(user)
        return user

    async def delete(self, user_id: int) -> bool:
        user = await self.get_by_id(user_id)
        if user is None:
            return False
        await self._session.delete(user)
        await self._session.flush()
        return True
