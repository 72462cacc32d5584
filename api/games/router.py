"""
Game catalog proxy endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Path, Request

from . import service

router = APIRouter()


def get_catalog(request: Request) -> service.CatalogCache:
    return request.app.state.catalog


@router.get("/games")
async def list_games(
    catalog: service.CatalogCache = Depends(get_catalog),
) -> list[dict[str, Any]]:
    return await service.list_games(catalog)


@router.get("/games/{game_id}")
async def get_game(
    game_id: int = Path(..., gt=0),
    catalog: service.CatalogCache = Depends(get_catalog),
) -> dict[str, Any]:
    return await service.get_game(catalog, game_id)


@router.post("/games/refresh")
async def refresh_games(
    catalog: service.CatalogCache = Depends(get_catalog),
) -> dict[str, Any]:
    """
    Drop the current snapshot and reload it from upstream.
    """
    return await service.refresh_catalog(catalog)
