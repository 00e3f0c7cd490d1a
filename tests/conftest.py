"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; populate them before any app module loads.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ALLOWED_ORIGIN", "http://testserver")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_TIMES", "100")
os.environ.setdefault("RATE_LIMIT_SECONDS", "60")
os.environ.setdefault("TRUST_PROXY", "false")

import pytest

from fakes import FakeEmbedder, FakeRenderer, InMemoryArtifactStore, InMemoryEntryStore


@pytest.fixture
def entries():
    return InMemoryEntryStore()


@pytest.fixture
def artifacts():
    return InMemoryArtifactStore()


@pytest.fixture
def embedder():
    return FakeEmbedder(
        {
            "hello world": [1.0, 0.0, 0.0],
            "goodbye": [0.0, 1.0, 0.0],
            "greetings planet": [1.0, 0.0, 0.0],
            "something else": [0.0, 0.0, 1.0],
        }
    )


@pytest.fixture
def renderer():
    return FakeRenderer()
