"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paylink.config import get_settings
from paylink.infrastructure.logging.log_config import setup_logging
from paylink.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _prepare_storage() -> None:
    """Make sure the configured backend can be written to on first use."""
    settings = get_settings()

    if settings.storage_backend == "sqlite":
        from paylink.infrastructure.database import Base, engine

        if settings.database_url.startswith("sqlite:///"):
            Path(settings.database_url.removeprefix("sqlite:///")).parent.mkdir(
                parents=True, exist_ok=True
            )
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite payment link store ready at %s", settings.database_url)
        return

    # The JSON file itself is created lazily by the first issued link
    Path(settings.storage_path).parent.mkdir(parents=True, exist_ok=True)
    logger.info("JSON payment link store at %s", settings.storage_path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging and prepare storage."""
    setup_logging()
    await _prepare_storage()

    yield

    if get_settings().storage_backend == "sqlite":
        from paylink.infrastructure.database import engine

        await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "paylink.main:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )
