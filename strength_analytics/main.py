"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from strength_analytics.api.v1 import api_router
from strength_analytics.core.config import Settings, get_settings
from strength_analytics.db.session import engine
from strength_analytics.services.strength_standards import available_standards

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cors_origins(settings: Settings) -> list[str]:
    """All origins in debug, localhost in development, CORS_ORIGINS (comma-separated) otherwise."""
    if settings.debug:
        return ["*"]
    if settings.environment == "development":
        return ["http://localhost:3000", "http://127.0.0.1:3000"]
    return [o.strip() for o in settings.cors_origins.split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: log what is loaded. Shutdown: dispose the engine pool. Schema is managed by Alembic."""
    logger.info(
        "%s starting (%s), %d strength standards loaded",
        app.title,
        get_settings().environment,
        len(available_standards()),
    )
    yield
    await engine.dispose()


def create_application(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
