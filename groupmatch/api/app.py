"""FastAPI application setup."""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from groupmatch.api.routes import events, suggestions
from groupmatch.api.routes.health import router as health_router
from groupmatch.config.logging_config import setup_logging
from groupmatch.config.settings import settings
from groupmatch.core.dependencies import init_dependencies, reset_dependencies

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    init_dependencies()
    logger.info("Application started")
    yield
    reset_dependencies()
    logger.info("Application shut down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="GroupMatch API",
        description="Matches individual activity requests into planned group events",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, tags=["Health"])
    app.include_router(events.router, tags=["Events"])
    app.include_router(suggestions.router, prefix="/suggestions", tags=["Suggestions"])

    logger.info("FastAPI application created")
    return app
