"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Config
from lib.bootstrap import build_service
from .api import api_router
from .errors import register_exception_handlers
from .middleware.correlation import CorrelationMiddleware
from .middleware.logging import LoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the short link table on startup when no service was injected.

    Every mutation is flushed as it happens, so shutdown has nothing to save.
    """
    logger = app.state.logger

    if app.state.service is None:
        logger.info("Starting URL shortener service...")
        app.state.service = build_service(app.state.config, logger=logger)
        logger.info(f"Service started with {len(app.state.service.store)} short links")

    yield

    logger.info("Service stopped")


def create_app(
    service_instance=None,
    config: Optional[Config] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Service instance (built from config on startup if not specified)
        config: Configuration instance
        logger: Logger instance

    Returns:
        Configured FastAPI app
    """
    config = config or Config()

    app = FastAPI(
        title="URL Shortener",
        description="Short links with expiry, backed by a JSON file",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger or logging.getLogger("url_shortener")

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Log-Id"],
    )

    # Outermost last: correlation id is bound before request logging runs
    app.add_middleware(LoggingMiddleware, service=config.service_name)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    app.include_router(api_router, tags=["API"])

    return app
