# repository/artifact_repository.py
from typing import Optional
from redis.asyncio import Redis
from redis.exceptions import RedisError
from config.cache import get_redis
from repository.namespaces import ARTIFACTS
from util.errors import StoreUnavailable
import logging

logger = logging.getLogger(__name__)


class ArtifactRepository:
    """
    Redis-backed byte storage for rendered QR codes keyed by entry id.

    Writes overwrite, so repeating a registration's artifact write is harmless.
    """

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(entry_id: str) -> str:
        return f"{ARTIFACTS}:{entry_id}"

    async def put(self, key: str, blob: bytes) -> None:
        try:
            r = await self._client()
            await r.set(self._key(key), blob)
        except RedisError as e:
            logger.error("artifact.put.error id=%s err=%s", key, type(e).__name__)
            raise StoreUnavailable() from e

    async def get(self, key: str) -> Optional[bytes]:
        try:
            r = await self._client()
            raw = await r.get(self._key(key))
        except RedisError as e:
            logger.error("artifact.get.error id=%s err=%s", key, type(e).__name__)
            raise StoreUnavailable() from e
        return raw
