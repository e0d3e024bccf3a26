"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.router import get_api_router
from src.core.config import settings
from src.core.database import check_database, engine, get_db
from src.core.logging import setup_logging
from src.core.middleware import setup_middleware
from src.schemas.shared import StatusResponse
from src.utils.messages import get_message

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    yield
    await engine.dispose()
    logger.info(f"{settings.PROJECT_NAME} stopped")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )

    setup_middleware(app)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", None)
        logger.exception(f"Unhandled error on {request.method} {request.url.path} (request {request_id})")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": get_message("crud", "internal_error")},
        )

    @app.get("/health", tags=["Health"])
    async def health_check(db: AsyncSession = Depends(get_db)):
        healthy = await check_database(db)
        return JSONResponse(
            status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=StatusResponse(
                status="healthy" if healthy else "unhealthy",
                version=settings.VERSION,
                timestamp=datetime.now(timezone.utc).isoformat(),
            ).model_dump(),
        )

    app.include_router(get_api_router(), prefix=settings.API_V1_STR)
    return app


app = create_app()
