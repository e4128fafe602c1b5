"""FastAPI application factory.

Provides:
- create_app(): Application factory function
- Lifespan context manager wiring the orchestrator at startup and closing its
  clients at shutdown
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tts_convert.api.middleware.error_handler import register_exception_handlers
from tts_convert.api.middleware.request_context import RequestContextMiddleware
from tts_convert.api.routers import conversions, health
from tts_convert.config import Settings, get_settings
from tts_convert.core.orchestrator import ConversionOrchestrator
from tts_convert.core.wiring import create_orchestrator
from tts_convert.utils.logging import get_logger, setup_logging

logger = get_logger("system")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    On startup: set up logging and build the orchestrator unless one was injected.
    On shutdown: close the orchestrator's clients.
    """
    settings: Settings = app.state.settings

    setup_logging(
        level=settings.log_level,
        format=settings.log_format,
        service_name=settings.app.name,
    )

    logger.info(
        "Starting conversion backend",
        version=settings.app.version,
        environment=settings.app.environment.value,
        debug=settings.app.debug,
    )

    if getattr(app.state, "orchestrator", None) is None:
        app.state.orchestrator = create_orchestrator(settings)

    logger.info("Conversion backend ready to accept requests")

    yield

    logger.info("Shutting down conversion backend")
    await app.state.orchestrator.shutdown()
    logger.info("Conversion backend shutdown complete")


def create_app(
    settings: Settings | None = None,
    orchestrator: ConversionOrchestrator | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Optional settings override (uses get_settings() if None)
        orchestrator: Optional pre-built orchestrator (built at startup if None)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Text and document to speech conversion API",
        docs_url="/docs" if settings.app.debug else None,
        redoc_url="/redoc" if settings.app.debug else None,
        openapi_url="/openapi.json" if settings.app.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.orchestrator = orchestrator

    register_exception_handlers(app, debug=settings.app.debug)

    # First added is innermost
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(conversions.router)

    return app
