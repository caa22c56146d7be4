"""Pytest configuration and fixtures."""

import random

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from lib.clock import FixedClock
from lib.database import InMemoryStorage, JSONFileStorage
from lib.service import URLShortenerService
from lib.shortcode import ShortCodeGenerator
from lib.common.logging_config import setup_logging
from web_app import create_app


# 2023-11-14T22:13:20Z
START_MS = 1_700_000_000_000


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Clock frozen at a known instant."""
    return FixedClock(START_MS)


@pytest.fixture
def short_code_generator():
    """Seeded short code generator."""
    return ShortCodeGenerator(default_length=8, rng=random.Random(1234))


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "urlRecords.json"


@pytest.fixture
def storage(data_file, logger):
    """File storage in a temporary directory."""
    return JSONFileStorage(data_file, logger=logger)


@pytest.fixture
def service(storage, short_code_generator, clock, logger) -> URLShortenerService:
    """Create service instance backed by a temporary data file."""
    return URLShortenerService.from_storage(
        storage,
        short_code_generator=short_code_generator,
        clock=clock,
        logger=logger,
    )


@pytest.fixture
def memory_service(short_code_generator, clock, logger) -> URLShortenerService:
    """Create service instance with non-durable storage."""
    return URLShortenerService(
        storage=InMemoryStorage(),
        short_code_generator=short_code_generator,
        clock=clock,
        logger=logger,
    )


@pytest.fixture
def config(data_file):
    return Config(data_file=str(data_file), storage_backend="file")


@pytest.fixture
def app(service, config, logger):
    """Create test FastAPI app."""
    return create_app(
        service_instance=service,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
