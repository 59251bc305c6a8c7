# inzozi/main.py

"""
FastAPI application entry point.

    uvicorn inzozi.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inzozi.adapters.configuration.config import settings
from inzozi.adapters.inbound.api.v1.router import api_router
from inzozi.adapters.outbound.cache.redis_session_cache import close_redis, init_redis
from inzozi.adapters.outbound.persistence.database import close_db
from inzozi.adapters.outbound.persistence.events import register_datetime_events
from inzozi.shared.middleware import (
    AsyncRequestLoggingMiddleware,
    ErrorHandlerMiddleware,
    register_exception_handlers,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    register_datetime_events()
    await init_redis()
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started ({settings.ENVIRONMENT})")
    try:
        yield
    finally:
        await close_redis()
        await close_db()
        logger.info("Shutdown complete")


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Authentication, password reset and role-based user management for school admissions.",
        docs_url="/docs" if settings.SCHEMA_VISIBILITY else None,
        redoc_url="/redoc" if settings.SCHEMA_VISIBILITY else None,
        openapi_url="/openapi.json" if settings.SCHEMA_VISIBILITY else None,
        lifespan=lifespan,
    )

    # Middlewares run in reverse order of registration
    application.add_middleware(ErrorHandlerMiddleware)
    application.add_middleware(AsyncRequestLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)
    application.include_router(api_router, prefix="/api")

    @application.get("/health", tags=["Health"], summary="Liveness check")
    async def health():
        return {"success": True, "message": "OK", "data": {"status": "healthy", "version": settings.VERSION}}

    return application


app = create_app()
