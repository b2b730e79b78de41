"""
Book catalog API routes — reads are public, writes need a bearer token.

Route prefix: /api/books
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import get_current_user
from books.models import (
    BookResponse,
    CreateBookRequest,
    UpdateBookRequest,
    UpdateStockRequest,
    strip_isbn_separators,
)
from books.service import BooksService
from database.session import get_db_session

router = APIRouter(tags=["books"])

_auth = [Depends(get_current_user)]


def get_books_service(session: AsyncSession = Depends(get_db_session)) -> BooksService:
    return BooksService(session)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=_auth,
)
async def create_book(req: CreateBookRequest, service: BooksService = Depends(get_books_service)):
    return await service.create(req.model_dump(exclude_unset=True))


@router.get("", response_model=List[BookResponse])
async def list_books(service: BooksService = Depends(get_books_service)):
    return await service.find_all()


@router.get("/search", response_model=List[BookResponse])
async def search_books(
    q: str = Query(..., min_length=1),
    service: BooksService = Depends(get_books_service),
):
    return await service.search(q)


@router.get("/category/{category}", response_model=List[BookResponse])
async def books_by_category(category: str, service: BooksService = Depends(get_books_service)):
    return await service.find_by_category(category)


@router.get("/author/{author}", response_model=List[BookResponse])
async def books_by_author(author: str, service: BooksService = Depends(get_books_service)):
    return await service.find_by_author(author)


@router.get("/isbn/{isbn}", response_model=BookResponse)
async def book_by_isbn(isbn: str, service: BooksService = Depends(get_books_service)):
    return await service.find_by_isbn(strip_isbn_separators(isbn))


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: int, service: BooksService = Depends(get_books_service)):
    return await service.find_one(book_id)


@router.patch("/{book_id}", response_model=BookResponse, dependencies=_auth)
async def update_book(
    book_id: int,
    req: UpdateBookRequest,
    service: BooksService = Depends(get_books_service),
):
    return await service.update(book_id, req.model_dump(exclude_unset=True))


@router.patch("/{book_id}/stock", response_model=BookResponse, dependencies=_auth)
async def update_stock(
    book_id: int,
    req: UpdateStockRequest,
    service: BooksService = Depends(get_books_service),
):
    return await service.update_stock(book_id, req.quantity)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=_auth)
async def delete_book(book_id: int, service: BooksService = Depends(get_books_service)) -> Response:
    await service.remove(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
