"""
Product persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal

from core import db


async def create_product(*, name: str, about: str, price: float) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO products (name, about, price)
        VALUES ($1, $2, $3)
        RETURNING id, name, about, price
        """,
        name,
        about,
        # NUMERIC column; go through str so 19.99 stays 19.99.
        Decimal(str(price)),
    )
    if row is None:
        raise RuntimeError("Failed to create product.")
    return row


async def list_products(*, limit: int, offset: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name, about, price
        FROM products
        ORDER BY id
        LIMIT $1 OFFSET $2
        """,
        limit,
        offset,
    )


async def get_product_by_id(product_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, about, price
        FROM products
        WHERE id = $1
        """,
        product_id,
    )


async def delete_product(product_id: int) -> dict | None:
    return await db.fetch_one(
        """
        DELETE FROM products
        WHERE id = $1
        RETURNING id, name, about, price
        """,
        product_id,
    )
