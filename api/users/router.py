"""
User CRUD endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status

from core.db import MAX_SERIAL_ID
from core.pagination import PageParams

from . import schemas, service

router = APIRouter()


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.UserResponse,
)
async def create_user(payload: schemas.CreateUserRequest) -> schemas.UserResponse:
    return await service.create_user(payload)


@router.get("/users", response_model=list[schemas.UserResponse])
async def list_users(params: PageParams = Depends()) -> list[schemas.UserResponse]:
    return await service.list_users(page=params.page, limit=params.limit)


@router.get("/users/{user_id}", response_model=schemas.UserResponse)
async def get_user(
    user_id: int = Path(..., gt=0, le=MAX_SERIAL_ID),
) -> schemas.UserResponse:
    return await service.get_user(user_id)


@router.put("/users/{user_id}", response_model=schemas.UserResponse)
async def replace_user(
    payload: schemas.ReplaceUserRequest,
    user_id: int = Path(..., gt=0, le=MAX_SERIAL_ID),
) -> schemas.UserResponse:
    return await service.replace_user(user_id, payload)


@router.patch("/users/{user_id}", response_model=schemas.UserResponse)
async def update_user(
    payload: schemas.UpdateUserRequest,
    user_id: int = Path(..., gt=0, le=MAX_SERIAL_ID),
) -> schemas.UserResponse:
    return await service.update_user(user_id, payload)


@router.delete("/users/{user_id}", response_model=schemas.UserResponse)
async def delete_user(
    user_id: int = Path(..., gt=0, le=MAX_SERIAL_ID),
) -> schemas.UserResponse:
    return await service.delete_user(user_id)
