"""Application factory: builds the FastAPI app with its own settings and database engine."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from app.api.exception_handlers import setup_exception_handlers
from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory
from app.models import Base

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """
    Build the app. settings defaults to the environment; engine defaults to one
    built from DATABASE_URL. Both end up on app.state for request dependencies.
    """
    if settings is None:
        settings = get_settings()
    owns_engine = engine is None
    if engine is None:
        engine = build_engine(settings)
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.JWT_SECRET is None:
            logger.error("JWT_SECRET is not set; login and protected routes will fail.")
        if settings.DB_AUTO_CREATE:
            Base.metadata.create_all(engine)
            logger.info("Database tables created or already present.")
        yield
        if owns_engine:
            engine.dispose()

    app = FastAPI(
        title="Account Auth API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Account Auth API"}

    return app
