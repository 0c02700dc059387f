"""Application entry point for the storefront API service."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from storefront.api.routes.auth import router as auth_router
from storefront.api.routes.catalog import router as catalog_router
from storefront.api.routes.settings import router as settings_router
from storefront.core.config import settings
from storefront.core.db import build_engine, build_session_factory, get_session
from storefront.core.logging import setup_logging
from storefront.core.middleware import BodySizeLimitMiddleware, RequestContextLogMiddleware
from storefront.core.rate_limit import init_rate_limiter
from storefront.services.settings_store import SettingsStore


def _cors_origins() -> list[str]:
    if settings.ENV == "prod":
        if not settings.CORS_ALLOWED_ORIGINS:
            raise RuntimeError("CORS_ALLOWED_ORIGINS must be configured for prod")
        return settings.CORS_ALLOWED_ORIGINS
    return settings.CORS_ALLOWED_ORIGINS or ["http://localhost:3000"]


def create_app(engine: Optional[AsyncEngine] = None) -> FastAPI:
    """Build the API with its engine, session factory and settings store.

    The handles are created once here and shared through ``app.state``.
    """

    engine = engine or build_engine(settings)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.bind(env=settings.ENV).info("app_startup")
        yield
        await engine.dispose()
        logger.info("app_shutdown")

    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.settings_store = SettingsStore(session_factory)

    init_rate_limiter(app)
    app.add_middleware(RequestContextLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(BodySizeLimitMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.get("/api/healthz", tags=["system"], summary="Liveness probe")
    def healthz() -> dict[str, str]:
        """Simple liveness probe that load balancers and monitors can call."""

        return {"status": "ok"}

    @app.get("/api/readyz", tags=["system"], summary="Readiness probe")
    async def readyz(session: AsyncSession = Depends(get_session)):
        try:
            await session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            raise HTTPException(status_code=503, detail="Database not reachable")
        return {"ready": True}

    app.include_router(auth_router, prefix="/api")
    app.include_router(settings_router, prefix="/api")
    app.include_router(catalog_router, prefix="/api")
    return app


setup_logging()

app = create_app()
