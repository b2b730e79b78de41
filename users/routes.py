"""
User API routes — all require a bearer token.

Route prefix: /api/users
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import Field

from api.schemas import RequestModel
from auth.dependencies import get_current_user, get_user_store
from auth.models import Email, PublicUser
from auth.store import UserStore
from users.service import UsersService

router = APIRouter(tags=["users"], dependencies=[Depends(get_current_user)])


class UpdateUserRequest(RequestModel):
    email: Optional[Email] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    avatar: Optional[str] = None


def get_users_service(store: UserStore = Depends(get_user_store)) -> UsersService:
    return UsersService(store)


@router.get("", response_model=List[PublicUser])
async def list_users(service: UsersService = Depends(get_users_service)) -> List[PublicUser]:
    return await service.find_all()


@router.get("/{user_id}", response_model=PublicUser)
async def get_user(user_id: int, service: UsersService = Depends(get_users_service)) -> PublicUser:
    return await service.find_one(user_id)


@router.patch("/{user_id}", response_model=PublicUser)
async def update_user(
    user_id: int,
    req: UpdateUserRequest,
    service: UsersService = Depends(get_users_service),
) -> PublicUser:
    return await service.update(user_id, req.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UsersService = Depends(get_users_service)) -> Response:
    await service.remove(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{user_id}/deactivate", response_model=PublicUser)
async def deactivate_user(user_id: int, service: UsersService = Depends(get_users_service)) -> PublicUser:
    return await service.deactivate(user_id)


@router.patch("/{user_id}/activate", response_model=PublicUser)
async def activate_user(user_id: int, service: UsersService = Depends(get_users_service)) -> PublicUser:
    return await service.activate(user_id)
