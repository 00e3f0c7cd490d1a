"""Tests for the shared Redis client lifecycle."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError

import config.cache as cache
from util.errors import StoreUnavailable


@pytest.fixture(autouse=True)
def reset_client():
    cache._client = None
    yield
    cache._client = None


def _fake_client(ping_error=None):
    client = MagicMock()
    client.ping = AsyncMock(side_effect=ping_error)
    client.aclose = AsyncMock()
    client.connection_pool.connection_kwargs = {"host": "redis.internal"}
    return client


@pytest.mark.asyncio
async def test_unreachable_store_is_reported_and_retried():
    down = _fake_client(ConnectionError("refused"))
    up = _fake_client()

    with patch("config.cache.from_url", side_effect=[down, up]):
        with pytest.raises(StoreUnavailable) as exc:
            await cache.get_redis()
        assert exc.value.code == "store_unavailable"
        down.aclose.assert_awaited_once()
        assert cache._client is None

        assert await cache.get_redis() is up


@pytest.mark.asyncio
async def test_client_is_shared_and_closed():
    client = _fake_client()

    with patch("config.cache.from_url", return_value=client) as make:
        assert await cache.get_redis() is client
        assert await cache.get_redis() is client
        make.assert_called_once()

    await cache.close_redis()
    client.aclose.assert_awaited_once()
    assert cache._client is None
