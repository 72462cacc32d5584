"""
Product endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status

from core.db import MAX_SERIAL_ID
from core.pagination import PageParams

from . import schemas, service

router = APIRouter()


@router.post(
    "/products",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.ProductResponse,
)
async def create_product(payload: schemas.CreateProductRequest) -> schemas.ProductResponse:
    return await service.create_product(payload)


@router.get("/products", response_model=list[schemas.ProductResponse])
async def list_products(params: PageParams = Depends()) -> list[schemas.ProductResponse]:
    return await service.list_products(page=params.page, limit=params.limit)


@router.get("/products/{product_id}", response_model=schemas.ProductResponse)
async def get_product(
    product_id: int = Path(..., gt=0, le=MAX_SERIAL_ID),
) -> schemas.ProductResponse:
    return await service.get_product(product_id)


@router.delete("/products/{product_id}", response_model=schemas.ProductResponse)
async def delete_product(
    product_id: int = Path(..., gt=0, le=MAX_SERIAL_ID),
) -> schemas.ProductResponse:
    return await service.delete_product(product_id)
