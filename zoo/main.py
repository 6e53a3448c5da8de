"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from zoo.config import get_settings
from zoo.application.schemas import ErrorResponse
from zoo.domain.exceptions import StoreUnavailableError
from zoo.infrastructure.database import Base, engine
from zoo.infrastructure.dependencies import get_cache_backend
from zoo.infrastructure.logging.log_config import setup_logging
from zoo.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _create_tables() -> None:
    """Create the animals/rooms tables and their indexes when missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables when configured, then open and close the cache around the app."""
    settings = get_settings()
    setup_logging()

    if settings.create_tables_on_startup:
        await _create_tables()

    cache = get_cache_backend()

    yield

    # Shutdown
    await cache.close()
    await engine.dispose()


async def store_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map store / cache failures to a 503 with a uniform error body."""
    code = status.HTTP_503_SERVICE_UNAVAILABLE
    logger.error(
        "%s %s -> %d: %s", request.method, request.url.path, code, exc, exc_info=exc
    )
    body = ErrorResponse(
        status=code,
        error="Service Unavailable",
        message=str(exc),
        path=request.url.path,
    )
    return JSONResponse(status_code=code, content=body.model_dump())


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

    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "zoo.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )
