#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: a single uvicorn worker owns the short link table. Requests are
served concurrently on one event loop; creates are serialized inside the
service so a custom code can only be claimed once.

Usage:
    python app.py

Environment variables:
    DATA_FILE - JSON file the short links are persisted to
    STORAGE_BACKEND - 'file' (default) or 'memory'
    HOST - Host to bind to
    PORT - Port to listen on
    DEFAULT_TTL_MINUTES - Validity of a short link when none is requested
    LOG_LEVEL - Logging level
"""

import signal
import sys

import uvicorn

from config import load_config
from lib.bootstrap import build_service
from lib.common.logging_config import setup_logging
from web_app import create_app


def main():
    """Main entry point."""
    # Load configuration
    config = load_config()

    # Setup logging
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    # Load the table before accepting connections
    service = build_service(config, logger=logger)
    logger.info(f"Loaded {len(service.store)} short links from {service.storage.describe()}")

    app = create_app(
        service_instance=service,
        config=config,
        logger=logger,
    )

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=1,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    # Run server
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
