import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from radiolib.config import settings
from radiolib.core.middleware import setup_middleware

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def ensure_tables() -> None:
    """Create missing tables; Alembic owns schema changes after that."""
    from radiolib.db.base import Base
    from radiolib.db.engine import engine
    import radiolib.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _seed_admin() -> None:
    from radiolib.db.engine import async_session_factory
    from radiolib.services.auth_service import seed_admin

    async with async_session_factory() as db:
        admin = await seed_admin(db)
        if admin:
            logger.info("Seeded admin user %s", admin.username)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    try:
        await ensure_tables()
    except Exception as e:
        logger.warning("Table creation skipped: %s", e)
    try:
        await _seed_admin()
    except Exception as e:
        logger.warning("Admin seeding skipped: %s", e)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Radio Library Admin API",
        version="0.1.0",
        description="Catalogue of people, programs, genres and recordings for a radio station",
        debug=settings.APP_DEBUG,
        lifespan=lifespan,
    )

    setup_middleware(app)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    from radiolib.api.v1 import router as api_v1_router
    app.include_router(api_v1_router, prefix="/api/v1")

    return app


app = create_app()
