"""Wiring of storage, generator and service from configuration."""

import logging
from typing import Optional

from .clock import Clock
from .database import URLStorageBase, InMemoryStorage, JSONFileStorage
from .service import URLShortenerService
from .shortcode import ShortCodeGenerator


def build_storage(config, logger: Optional[logging.Logger] = None) -> URLStorageBase:
    """Create the storage backend named by ``config.storage_backend``."""
    if config.storage_backend == "memory":
        return InMemoryStorage()
    return JSONFileStorage(config.data_file, logger=logger)


def build_service(
    config,
    logger: Optional[logging.Logger] = None,
    storage: Optional[URLStorageBase] = None,
    clock: Optional[Clock] = None,
    generator: Optional[ShortCodeGenerator] = None,
) -> URLShortenerService:
    """Create a service whose table is loaded from the configured storage.

    Args:
        config: Configuration instance
        logger: Optional logger
        storage: Storage override (built from config if not specified)
        clock: Clock override
        generator: Short code generator override

    Returns:
        Ready to use service
    """
    storage = storage or build_storage(config, logger)
    return URLShortenerService.from_storage(
        storage,
        short_code_generator=generator or ShortCodeGenerator(default_length=config.short_code_length),
        clock=clock,
        logger=logger,
        default_ttl_minutes=config.default_ttl_minutes,
        enable_custom_codes=config.enable_custom_codes,
        max_url_length=config.max_url_length,
        max_custom_code_length=config.max_custom_code_length,
    )
