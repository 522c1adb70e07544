"""Shared fixtures for web API tests."""

import random

import pytest
from fastapi.testclient import TestClient

from ensemble.engine import EnsembleEngine
from feed.errors import DataUnavailableError
from feed.parser import parse_history
from web.deps import get_display_rng, get_engine, get_feed


class StubFeed:
    """Stands in for RoundFeedClient; returns parsed history or raises."""

    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls = 0

    async def fetch_history(self):
        self.calls += 1
        if self.error:
            raise self.error
        return parse_history(self.payload)


@pytest.fixture
def engine():
    return EnsembleEngine(rng=random.Random(0))


@pytest.fixture
def stub_feed(upstream_payload):
    return StubFeed(upstream_payload)


@pytest.fixture
def client(engine, stub_feed):
    """Test client with the feed, engine and display rng overridden."""
    from web.app import app

    app.dependency_overrides[get_feed] = lambda: stub_feed
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_display_rng] = lambda: random.Random(42)

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def unavailable_feed():
    return StubFeed(error=DataUnavailableError("upstream returned HTTP 502"))
