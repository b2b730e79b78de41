"""
Request / response schemas for the book catalog.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from api.schemas import CamelModel, RequestModel

_ISBN_SEPARATORS = re.compile(r"[\s-]")


def strip_isbn_separators(value: str) -> str:
    return _ISBN_SEPARATORS.sub("", value).upper()


def normalize_isbn(value: str) -> str:
    """
    Strip separators and check an ISBN-10 or ISBN-13 checksum.

    Returns the bare digits (plus a trailing ``X`` for ISBN-10).
    """
    isbn = strip_isbn_separators(value)
    if re.fullmatch(r"\d{9}[\dX]", isbn):
        total = sum((10 - i) * (10 if c == "X" else int(c)) for i, c in enumerate(isbn))
        if total % 11 == 0:
            return isbn
    elif re.fullmatch(r"\d{13}", isbn):
        total = sum(int(c) * (1 if i % 2 == 0 else 3) for i, c in enumerate(isbn))
        if total % 10 == 0:
            return isbn
    raise ValueError("isbn must be a valid ISBN-10 or ISBN-13")


class BookFields(RequestModel):
    """Fields shared by create and update; all optional here."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    author: Optional[str] = Field(None, min_length=1, max_length=255)
    isbn: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, max_length=100)
    published_date: Optional[datetime] = None
    cover_image: Optional[str] = None

    @field_validator("isbn")
    @classmethod
    def _check_isbn(cls, value: Optional[str]) -> Optional[str]:
        return normalize_isbn(value) if value is not None else None


class CreateBookRequest(BookFields):
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    isbn: str
    price: Decimal = Field(..., ge=0, decimal_places=2)


class UpdateBookRequest(BookFields):
    pass


class UpdateStockRequest(RequestModel):
    quantity: int = Field(..., ge=0)


class BookResponse(CamelModel):
    id: int
    title: str
    author: str
    isbn: str
    description: Optional[str] = None
    price: Decimal
    stock: Optional[int] = 0
    category: Optional[str] = None
    published_date: Optional[datetime] = None
    cover_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
