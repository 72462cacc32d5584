"""
Table bootstrap for the store API.

Only `CREATE TABLE IF NOT EXISTS`; schema changes are out of scope here.
"""

from __future__ import annotations

from . import db

STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        password_hash TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS products (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        about TEXT NOT NULL,
        price NUMERIC(12, 2) NOT NULL CHECK (price > 0)
    )
    """,
)


async def ensure_schema() -> None:
    for statement in STATEMENTS:
        await db.execute(statement)
