"""
Game catalog cache (orchestration).

The catalog is a snapshot of an external system, not owned data:
- `CatalogCache` holds the snapshot plus an id index
- the snapshot expires after `ttl_s` seconds (never when `ttl_s <= 0`)
- `invalidate()` forces the next read to refetch
- a failed refresh keeps serving the previous snapshot if there is one
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from fastapi import status

from core import config, errors, freetogame

CATALOG_UNAVAILABLE_MESSAGE = "Game catalog unavailable."
NOT_FOUND_MESSAGE = "Game not found."

Fetcher = Callable[[], Awaitable[list[dict[str, Any]]]]

logger = logging.getLogger(__name__)


class CatalogCache:
    def __init__(
        self,
        fetch: Fetcher,
        *,
        ttl_s: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self._ttl_s = ttl_s
        self._clock = clock
        self._lock = asyncio.Lock()
        self._games: list[dict[str, Any]] = []
        self._by_id: dict[int, dict[str, Any]] = {}
        self._loaded_at: float | None = None
        self._loaded_at_utc: datetime | None = None
        self._invalidated = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded_at is not None

    @property
    def loaded_at(self) -> datetime | None:
        return self._loaded_at_utc

    @property
    def is_stale(self) -> bool:
        if self._loaded_at is None or self._invalidated:
            return True
        if self._ttl_s <= 0:
            return False
        return self._clock() - self._loaded_at >= self._ttl_s

    def invalidate(self) -> None:
        self._invalidated = True

    def _store(self, games: list[dict[str, Any]]) -> None:
        self._games = list(games)
        self._by_id = {int(game["id"]): game for game in self._games}
        self._loaded_at = self._clock()
        self._loaded_at_utc = datetime.now(timezone.utc)
        self._invalidated = False

    async def refresh(self) -> int:
        """
        Fetch unconditionally and replace the snapshot. Errors propagate.
        """
        async with self._lock:
            games = await self._fetch()
            self._store(games)
        logger.info("catalog_refreshed count=%s", len(games))
        return len(games)

    async def _ensure_fresh(self) -> None:
        if not self.is_stale:
            return
        async with self._lock:
            # Another request may have refreshed while we waited.
            if not self.is_stale:
                return
            try:
                games = await self._fetch()
            except freetogame.FreeToGameError:
                if not self.is_loaded:
                    raise
                logger.warning("catalog_refresh_failed serving_stale count=%s", len(self._games), exc_info=True)
                return
            self._store(games)
        logger.info("catalog_refreshed count=%s", len(games))

    async def games(self) -> list[dict[str, Any]]:
        await self._ensure_fresh()
        return self._games

    async def get(self, game_id: int) -> dict[str, Any] | None:
        await self._ensure_fresh()
        return self._by_id.get(game_id)


def build_cache() -> CatalogCache:
    base_url = config.freetogame_base_url()
    timeout_s = config.catalog_timeout_s()

    async def fetch() -> list[dict[str, Any]]:
        return await freetogame.fetch_games(base_url=base_url, timeout_s=timeout_s)

    return CatalogCache(fetch, ttl_s=config.catalog_ttl_s())


def _unavailable(exc: freetogame.FreeToGameError) -> errors.ApiError:
    logger.error("catalog_unavailable error=%s", exc)
    return errors.ApiError(status.HTTP_502_BAD_GATEWAY, CATALOG_UNAVAILABLE_MESSAGE)


async def list_games(cache: CatalogCache) -> list[dict[str, Any]]:
    try:
        return await cache.games()
    except freetogame.FreeToGameError as exc:
        raise _unavailable(exc) from exc


async def get_game(cache: CatalogCache, game_id: int) -> dict[str, Any]:
    try:
        game = await cache.get(game_id)
    except freetogame.FreeToGameError as exc:
        raise _unavailable(exc) from exc
    if game is None:
        raise errors.not_found(NOT_FOUND_MESSAGE)
    return game


async def refresh_catalog(cache: CatalogCache) -> dict[str, Any]:
    try:
        count = await cache.refresh()
    except freetogame.FreeToGameError as exc:
        raise _unavailable(exc) from exc
    return {"count": count, "loaded_at": cache.loaded_at}
