# config/cache.py
from typing import Optional
from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError
from config.settings import settings
from util.errors import StoreUnavailable
import logging

logger = logging.getLogger(__name__)

_client: Optional[Redis] = None


async def get_redis() -> Redis:
    """
    Shared client for the entry rows and QR artifacts. Created on first use and pinged
    once; an unreachable server is reported as StoreUnavailable and the next call
    retries the connection.
    """
    global _client
    if _client is None:
        client = from_url(
            settings.REDIS_URL,
            decode_responses=False,  # QR artifacts are stored as raw SVG bytes
            socket_keepalive=True,
            health_check_interval=30,
        )
        try:
            await client.ping()
        except RedisError as e:
            logger.error(
                "store.redis.unreachable host=%s err=%s",
                client.connection_pool.connection_kwargs.get("host", "?"),
                type(e).__name__,
            )
            await client.aclose()
            raise StoreUnavailable("Entry store (Redis) is unreachable") from e
        _client = client
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
