"""
Product business logic.

Products can be created, read and deleted; there is no update operation.
"""

from __future__ import annotations

import logging

from core import errors
from core.pagination import offset_for

from . import repository, schemas

NOT_FOUND_MESSAGE = "Product not found."

logger = logging.getLogger(__name__)


def _to_product_response(row: dict) -> schemas.ProductResponse:
    return schemas.ProductResponse(
        id=int(row["id"]),
        name=str(row["name"]),
        about=str(row["about"]),
        price=float(row["price"]),
    )


async def create_product(payload: schemas.CreateProductRequest) -> schemas.ProductResponse:
    with errors.storage_errors("Error while inserting the product."):
        row = await repository.create_product(
            name=payload.name,
            about=payload.about,
            price=payload.price,
        )
    logger.info("product_created id=%s", row["id"])
    return _to_product_response(row)


async def list_products(*, page: int, limit: int) -> list[schemas.ProductResponse]:
    with errors.storage_errors("Error while fetching products."):
        rows = await repository.list_products(limit=limit, offset=offset_for(page, limit))
    return [_to_product_response(row) for row in rows]


async def get_product(product_id: int) -> schemas.ProductResponse:
    with errors.storage_errors("Error while fetching the product."):
        row = await repository.get_product_by_id(product_id)
    if row is None:
        raise errors.not_found(NOT_FOUND_MESSAGE)
    return _to_product_response(row)


async def delete_product(product_id: int) -> schemas.ProductResponse:
    with errors.storage_errors("Error while deleting the product."):
        row = await repository.delete_product(product_id)
    if row is None:
        raise errors.not_found(NOT_FOUND_MESSAGE)
    logger.info("product_deleted id=%s", product_id)
    return _to_product_response(row)
