"""
User business logic.

Passwords are digested here, before anything is handed to the repository.
"""

from __future__ import annotations

import logging

from core import errors
from core.pagination import offset_for

from . import repository, schemas, security

NOT_FOUND_MESSAGE = "User not found."
NO_UPDATE_DATA_MESSAGE = "No update data supplied."

logger = logging.getLogger(__name__)


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        name=str(user_row["name"]),
        email=str(user_row["email"]),
    )


def _digest(plain_password: str) -> str:
    try:
        return security.hash_password(plain_password)
    except security.PasswordHashError as exc:
        raise errors.bad_request(
            errors.INVALID_BODY_MESSAGE,
            [{"field": "password", "kind": "password_hash", "message": str(exc)}],
        ) from exc


async def create_user(payload: schemas.CreateUserRequest) -> schemas.UserResponse:
    password_hash = _digest(payload.password)
    with errors.storage_errors("Error while inserting the user."):
        user_row = await repository.create_user(
            name=payload.name,
            email=payload.email,
            password_hash=password_hash,
        )
    logger.info("user_created id=%s", user_row["id"])
    return _to_user_response(user_row)


async def list_users(*, page: int, limit: int) -> list[schemas.UserResponse]:
    with errors.storage_errors("Error while fetching users."):
        rows = await repository.list_users(limit=limit, offset=offset_for(page, limit))
    return [_to_user_response(row) for row in rows]


async def get_user(user_id: int) -> schemas.UserResponse:
    with errors.storage_errors("Error while fetching the user."):
        user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise errors.not_found(NOT_FOUND_MESSAGE)
    return _to_user_response(user_row)


async def replace_user(user_id: int, payload: schemas.ReplaceUserRequest) -> schemas.UserResponse:
    password_hash = _digest(payload.password)
    with errors.storage_errors("Error while updating the user."):
        user_row = await repository.replace_user(
            user_id,
            name=payload.name,
            email=payload.email,
            password_hash=password_hash,
        )
    if user_row is None:
        raise errors.not_found(NOT_FOUND_MESSAGE)
    logger.info("user_replaced id=%s", user_id)
    return _to_user_response(user_row)


async def update_user(user_id: int, payload: schemas.UpdateUserRequest) -> schemas.UserResponse:
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise errors.bad_request(NO_UPDATE_DATA_MESSAGE)

    changes: dict[str, str] = {}
    for key in ("name", "email"):
        if key in fields:
            changes[key] = fields[key]
    if "password" in fields:
        changes["password_hash"] = _digest(fields["password"])

    with errors.storage_errors("Error while updating the user."):
        user_row = await repository.update_user(user_id, changes)
    if user_row is None:
        raise errors.not_found(NOT_FOUND_MESSAGE)
    logger.info("user_updated id=%s fields=%s", user_id, ",".join(sorted(fields)))
    return _to_user_response(user_row)


async def delete_user(user_id: int) -> schemas.UserResponse:
    with errors.storage_errors("Error while deleting the user."):
        user_row = await repository.delete_user(user_id)
    if user_row is None:
        raise errors.not_found(NOT_FOUND_MESSAGE)
    logger.info("user_deleted id=%s", user_id)
    return _to_user_response(user_row)
