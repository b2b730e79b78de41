"""
Book catalog persistence — CRUD, search, filters and stock updates.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from api.exceptions import ConflictError, NotFoundError, ValidationError
from database.models import Book, utcnow

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("title", "author", "isbn", "price")


def _contains(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class BooksService:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, fields: Dict[str, Any]) -> Book:
        await self._ensure_isbn_free(fields["isbn"])
        book = Book(**fields)
        self._session.add(book)
        await self._session.flush()
        await self._session.refresh(book)
        logger.info("Created book %s (%s)", book.id, book.isbn)
        return book

    async def find_all(self) -> List[Book]:
        return await self._all(select(Book).order_by(Book.id))

    async def find_one(self, book_id: int) -> Book:
        book = await self._session.get(Book, book_id)
        if book is None:
            raise NotFoundError(f"Book with ID {book_id} not found", details={"book_id": book_id})
        return book

    async def update(self, book_id: int, fields: Dict[str, Any]) -> Book:
        """Apply a partial update. ``fields`` holds only what the caller sent."""
        nulled = [name for name in _REQUIRED_FIELDS if name in fields and fields[name] is None]
        if nulled:
            raise ValidationError(f"Fields cannot be null: {', '.join(nulled)}")

        book = await self.find_one(book_id)
        if fields.get("isbn") and fields["isbn"] != book.isbn:
            await self._ensure_isbn_free(fields["isbn"])
        return await self._write(book, **fields)

    async def remove(self, book_id: int) -> None:
        book = await self.find_one(book_id)
        await self._session.delete(book)
        await self._session.flush()
        logger.info("Deleted book %s", book_id)

    async def find_by_category(self, category: str) -> List[Book]:
        return await self._all(select(Book).where(Book.category == category).order_by(Book.id))

    async def find_by_author(self, author: str) -> List[Book]:
        stmt = select(Book).where(Book.author.ilike(_contains(author), escape="\\"))
        return await self._all(stmt.order_by(Book.id))

    async def search(self, query: str) -> List[Book]:
        """Case-insensitive substring match on title, author or description."""
        pattern = _contains(query)
        stmt = select(Book).where(
            or_(
                Book.title.ilike(pattern, escape="\\"),
                Book.author.ilike(pattern, escape="\\"),
                Book.description.ilike(pattern, escape="\\"),
            )
        )
        return await self._all(stmt.order_by(Book.id))

    async def find_by_isbn(self, isbn: str) -> Book:
        book = await self._get_by_isbn(isbn)
        if book is None:
            raise NotFoundError(f"Book with ISBN {isbn} not found", details={"isbn": isbn})
        return book

    async def update_stock(self, book_id: int, quantity: int) -> Book:
        book = await self.find_one(book_id)
        return await self._write(book, stock=quantity)

    # ── Helpers ─────────────────────────────────────────────────────────

    async def _all(self, stmt) -> List[Book]:
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def _get_by_isbn(self, isbn: str) -> Optional[Book]:
        result = await self._session.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    async def _ensure_isbn_free(self, isbn: str) -> None:
        if await self._get_by_isbn(isbn) is not None:
            raise ConflictError(f"Book with ISBN {isbn} already exists", details={"isbn": isbn})

    async def _write(self, book: Book, **fields: Any) -> Book:
        for name, value in fields.items():
            setattr(book, name, value)
        book.updated_at = utcnow()
        await self._session.flush()
        await self._session.refresh(book)
        return book
