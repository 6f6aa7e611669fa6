"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient

from config import Config
from shortlinks.registry import CodeRegistry
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.storage.memory import InMemoryMappingStore
from shortlinks.common.logging_config import setup_logging
from web_app import create_app
from tests.fakes import RecordingSink


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger) -> InMemoryMappingStore:
    """Create an empty in-memory store."""
    return InMemoryMappingStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def click_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
async def registry(store, short_code_generator, click_sink, logger) -> AsyncGenerator[CodeRegistry, None]:
    """Create registry instance over the in-memory store."""
    registry = CodeRegistry(
        store=store,
        short_code_generator=short_code_generator,
        analytics=click_sink,
        logger=logger,
    )
    
    yield registry
    
    await registry.close()


@pytest.fixture
def app_config() -> Config:
    return Config(
        storage_backend="memory",
        base_url="http://testserver",
        _env_file=None,
    )


@pytest.fixture
def app(registry, app_config):
    """Create test FastAPI app."""
    return create_app(registry_instance=registry, config=app_config)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
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
