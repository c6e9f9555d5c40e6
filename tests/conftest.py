"""Pytest configuration and fixtures."""

import random
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from che_shortener.common.logging_config import setup_logging
from che_shortener.service import URLShortenerService
from che_shortener.shortcode import ShortCodeGenerator
from che_shortener.store.json_file import JSONFileURLStore
from che_shortener.store.models import URLRecord
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store_path(tmp_path):
    """Path of a fresh store file containing an empty array."""
    path = tmp_path / "urls.json"
    path.write_text("[]")
    return path


@pytest.fixture
def store(store_path, logger) -> JSONFileURLStore:
    """Create a loaded store backed by a temporary file."""
    store = JSONFileURLStore(str(store_path), logger=logger)
    store.load()
    return store


@pytest.fixture
def short_code_generator():
    """Create a seeded short code generator."""
    return ShortCodeGenerator(rng=random.Random(1234))


@pytest.fixture
def service(store, short_code_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def static_dir(tmp_path):
    """Static asset root with an index page and one script."""
    root = tmp_path / "build"
    root.mkdir()
    (root / "index.html").write_text("<html><body>Che URL Shortener</body></html>")
    (root / "static").mkdir()
    (root / "static" / "main.js").write_text("console.log('shortener');")
    return root


@pytest.fixture
def config(store_path, static_dir):
    """Configuration pointing at the temporary store and assets."""
    return Config(store_path=str(store_path), static_dir=str(static_dir))


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
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
        "https://example.com/a-very-long-url",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456?tab=votes#answer",
    ]


@pytest.fixture
def make_record():
    """Factory for records with a fixed creation time."""
    def _make(short_code="test-code", long_url="https://example.com/redirect-target", usage_count=0):
        return URLRecord(
            short_code=short_code,
            long_url=long_url,
            created_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
            usage_count=usage_count,
        )
    return _make

