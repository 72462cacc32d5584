"""
User persistence helpers.

Every query returns only the public projection (id, name, email); the stored
password digest never leaves this module.
"""

from __future__ import annotations

from typing import Any

from core import db

# Columns a caller may change through update_user(), in SET-clause order.
MUTABLE_COLUMNS: tuple[str, ...] = ("name", "email", "password_hash")


async def create_user(*, name: str, email: str, password_hash: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (name, email, password_hash)
        VALUES ($1, $2, $3)
        RETURNING id, name, email
        """,
        name,
        email,
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def list_users(*, limit: int, offset: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name, email
        FROM users
        ORDER BY id
        LIMIT $1 OFFSET $2
        """,
        limit,
        offset,
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, email
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def replace_user(user_id: int, *, name: str, email: str, password_hash: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE users
        SET name = $2,
            email = $3,
            password_hash = $4
        WHERE id = $1
        RETURNING id, name, email
        """,
        user_id,
        name,
        email,
        password_hash,
    )


def build_update_statement(user_id: int, changes: dict[str, Any]) -> tuple[str, list[Any]]:
    """
    Build a partial UPDATE from an allow-list of columns.

    Column names come from MUTABLE_COLUMNS only; values are always bound.
    """
    unknown = set(changes) - set(MUTABLE_COLUMNS)
    if unknown:
        raise ValueError(f"Columns not updatable: {sorted(unknown)}")

    args: list[Any] = [user_id]
    assignments: list[str] = []
    for column in MUTABLE_COLUMNS:
        if column not in changes:
            continue
        args.append(changes[column])
        assignments.append(f"{column} = ${len(args)}")

    if not assignments:
        raise ValueError("No columns to update.")

    sql = f"""
        UPDATE users
        SET {", ".join(assignments)}
        WHERE id = $1
        RETURNING id, name, email
        """
    return sql, args


async def update_user(user_id: int, changes: dict[str, Any]) -> dict | None:
    sql, args = build_update_statement(user_id, changes)
    return await db.fetch_one(sql, *args)


async def delete_user(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        DELETE FROM users
        WHERE id = $1
        RETURNING id, name, email
        """,
        user_id,
    )
