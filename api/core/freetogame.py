"""
FreeToGame HTTP client helpers.

Used endpoints:
- GET /games  -> [{"id": 452, "title": "...", ...}, ...]
"""

from __future__ import annotations

from typing import Any

import httpx


# Upstream failures are explicit and separable from other runtime errors.
class FreeToGameError(RuntimeError):
    pass


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise FreeToGameError("FREETOGAME_BASE_URL is empty.")
    return base_url.rstrip("/")


def _has_int_id(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    game_id = item.get("id")
    return isinstance(game_id, int) and not isinstance(game_id, bool)


async def fetch_games(*, base_url: str, timeout_s: float = 30.0) -> list[dict[str, Any]]:
    """
    Download the full game list.

    Entries that are not objects with an integer `id` are dropped.
    """
    base_url = _normalize_base_url(base_url)

    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=timeout_s) as client:
            resp = await client.get("/games")
    except httpx.HTTPError as exc:
        raise FreeToGameError(f"FreeToGame request failed: {exc}") from exc

    if resp.status_code != 200:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:500]
        raise FreeToGameError(f"FreeToGame games request failed: {resp.status_code} {body}")

    try:
        data: Any = resp.json()
    except ValueError as exc:
        raise FreeToGameError("FreeToGame returned invalid JSON.") from exc

    if not isinstance(data, list):
        raise FreeToGameError("FreeToGame returned a non-list game payload.")

    return [item for item in data if _has_int_id(item)]
