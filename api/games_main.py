import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from core import config, errors, freetogame
from core.logging_config import setup_logging
from games import router as games_router
from games import service as games_service

setup_logging(config.log_level())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    catalog = games_service.build_cache()
    app.state.catalog = catalog
    # Warm the cache; an unreachable upstream must not stop the service.
    try:
        await catalog.refresh()
    except freetogame.FreeToGameError:
        logger.exception("catalog_initial_load_failed")
    yield


app = FastAPI(title="game-catalog-proxy", lifespan=lifespan)
errors.install_error_handlers(app)

app.include_router(games_router.router, tags=["games"])


@app.get("/health")
def health(request: Request) -> dict:
    catalog = getattr(request.app.state, "catalog", None)
    return {"status": "ok", "catalog_loaded": bool(catalog is not None and catalog.is_loaded)}
