import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from assethub.config import settings
from assethub.core.middleware import setup_middleware

logger = logging.getLogger(__name__)


async def ensure_tables() -> None:
    """Create DB tables that don't exist yet."""
    from assethub.db.engine import engine
    from assethub.db.base import Base
    import assethub.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await ensure_tables()
    if not settings.job_configured:
        logger.warning("JOB_BUCKET_NAME/JOB_OBJECT_KEY not set; /runJob will answer 503")
    yield

    from assethub.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="AssetHub API",
        version="0.1.0",
        description="Asset registry with an external job trigger",
        debug=settings.APP_DEBUG,
        lifespan=lifespan,
    )

    setup_middleware(app)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    from assethub.api.v1 import router as api_v1_router
    app.include_router(api_v1_router, prefix="/api/v1")

    return app


app = create_app()
