import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from core import config, db, errors, schema
from core.logging_config import setup_logging
from products import router as products_router
from users import router as users_router
from users import security as users_security

setup_logging(config.log_level())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Fail fast on a bad PASSWORD_HASH_SCHEME instead of on the first write.
    scheme = users_security.resolve_scheme()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        if config.auto_create_schema():
            await schema.ensure_schema()
        logger.info("store_api_ready password_hash_scheme=%s", scheme)
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="store-api", lifespan=lifespan)
errors.install_error_handlers(app)

app.include_router(users_router.router, tags=["users"])
app.include_router(products_router.router, tags=["products"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "store api"}
