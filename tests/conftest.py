"""Pytest fixtures for all tests."""

import pytest
from httpx import AsyncClient, ASGITransport

from nulid.config import Config
from nulid.generation.generator import Generator
from nulid.sources.clock import MockClock
from nulid.sources.rng import SequentialRng
from nulid.ui.app import create_app

# 2024-01-01T00:00:00Z
EPOCH_2024_NS = 1_704_067_200_000_000_000


@pytest.fixture
def clock():
    """Test clock frozen at 2024-01-01."""
    return MockClock(EPOCH_2024_NS)


@pytest.fixture
def rng():
    """Readable tail bits: 0, 1, 2, ..."""
    return SequentialRng()


@pytest.fixture
def generator(clock, rng):
    """Generator on the test clock and sequential rng."""
    return Generator(clock=clock, rng=rng)


@pytest.fixture
async def app(generator):
    """Create test FastAPI app."""
    return create_app(Config(), generator=generator)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
