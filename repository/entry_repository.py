# repository/entry_repository.py
from typing import Final, List
from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError
from config.cache import get_redis
from model.entry import Entry
from repository.namespaces import ENTRIES, ENTRY_IDS
from util.errors import DuplicateEntry, StoreUnavailable
import logging

logger = logging.getLogger(__name__)

KEY_PREFIX: Final[str] = ENTRIES


class EntryRepository:
    """
    Flow:
    - The id is added to a set that serves as the listing index (SADD is idempotent).
    - The Entry is then written as one JSON document (fingerprint as a JSON array)
      with SET NX, so an existing id is never overwritten. A failed write leaves
      only an index member, which list_all skips and a retry reuses.
    - list_all reads the index and MGETs the documents; ids whose document is
      gone or unreadable are skipped.
    """

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(entry_id: str) -> str:
        return f"{KEY_PREFIX}:{entry_id}"

    async def exists(self, entry_id: str) -> bool:
        try:
            r = await self._client()
            return bool(await r.exists(self._key(entry_id)))
        except RedisError as e:
            logger.error("entry.exists.error id=%s err=%s", entry_id, type(e).__name__)
            raise StoreUnavailable() from e

    async def insert(self, entry: Entry) -> None:
        payload = entry.model_dump_json().encode("utf-8")
        try:
            r = await self._client()
            # Index first: a dangling id is skipped by list_all, an unindexed row is lost
            await r.sadd(ENTRY_IDS, entry.id)
            created = await r.set(self._key(entry.id), payload, nx=True)
            if not created:
                raise DuplicateEntry()
        except RedisError as e:
            logger.error("entry.insert.error id=%s err=%s", entry.id, type(e).__name__)
            raise StoreUnavailable() from e

    async def list_all(self) -> List[Entry]:
        try:
            r = await self._client()
            ids = sorted(
                v.decode("utf-8") if isinstance(v, (bytes, bytearray)) else str(v)
                for v in (await r.smembers(ENTRY_IDS) or ())
            )
            if not ids:
                return []
            vals = await r.mget([self._key(i) for i in ids])
        except RedisError as e:
            logger.error("entry.list.error err=%s", type(e).__name__)
            raise StoreUnavailable() from e

        out: List[Entry] = []
        for entry_id, raw in zip(ids, vals):
            if raw is None:
                logger.warning("entry.list.dangling id=%s", entry_id)
                continue
            try:
                out.append(Entry.model_validate_json(raw))
            except ValidationError:
                # Skip malformed documents instead of failing every query
                logger.warning("entry.list.malformed id=%s", entry_id)
        return out
