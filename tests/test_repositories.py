"""Unit tests for the Redis-backed entry and artifact repositories."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError

from model.entry import Entry
from repository.artifact_repository import ArtifactRepository
from repository.entry_repository import EntryRepository
from util.errors import DuplicateEntry, StoreUnavailable


def _entry(entry_id: str, fingerprint=None) -> Entry:
    return Entry(
        id=entry_id,
        text=f"text for {entry_id}",
        fingerprint=fingerprint or [0.1, 0.2, 0.3],
        createdAt=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def redis_client():
    client = AsyncMock()
    with patch("repository.entry_repository.get_redis", AsyncMock(return_value=client)), patch(
        "repository.artifact_repository.get_redis", AsyncMock(return_value=client)
    ):
        yield client


@pytest.mark.asyncio
async def test_insert_uses_set_nx_and_indexes_id(redis_client):
    redis_client.set.return_value = True
    entry = _entry("doc-1")

    await EntryRepository().insert(entry)

    key, payload = redis_client.set.call_args.args
    assert key == "qrrecall:entry:doc-1"
    assert redis_client.set.call_args.kwargs == {"nx": True}
    assert Entry.model_validate_json(payload) == entry
    redis_client.sadd.assert_awaited_once_with("qrrecall:entry_ids", "doc-1")


@pytest.mark.asyncio
async def test_insert_existing_id_raises_duplicate(redis_client):
    redis_client.set.return_value = None

    with pytest.raises(DuplicateEntry):
        await EntryRepository().insert(_entry("doc-1"))
    # Re-adding an existing id to the index is a no-op
    redis_client.sadd.assert_awaited_once_with("qrrecall:entry_ids", "doc-1")


@pytest.mark.asyncio
async def test_index_failure_writes_no_row_and_retry_succeeds(redis_client):
    redis_client.sadd.side_effect = [ConnectionError("down"), 1]
    redis_client.set.return_value = True
    repo = EntryRepository()

    with pytest.raises(StoreUnavailable):
        await repo.insert(_entry("doc-1"))
    redis_client.set.assert_not_called()

    await repo.insert(_entry("doc-1"))
    redis_client.set.assert_awaited_once()


@pytest.mark.asyncio
async def test_row_failure_leaves_only_index_member_and_retry_succeeds(redis_client):
    redis_client.set.side_effect = [ConnectionError("down"), True]
    repo = EntryRepository()

    with pytest.raises(StoreUnavailable):
        await repo.insert(_entry("doc-1"))

    # The dangling id is invisible to listing
    redis_client.smembers.return_value = {b"doc-1"}
    redis_client.mget.return_value = [None]
    assert await repo.list_all() == []

    await repo.insert(_entry("doc-1"))
    assert redis_client.sadd.await_count == 2
    assert redis_client.set.await_count == 2


@pytest.mark.asyncio
async def test_list_all_skips_dangling_and_malformed(redis_client):
    good = _entry("a")
    redis_client.smembers.return_value = {b"c", b"a", b"b"}
    redis_client.mget.return_value = [good.model_dump_json().encode(), None, b"{not json"]

    rows = await EntryRepository().list_all()

    redis_client.mget.assert_awaited_once_with(
        ["qrrecall:entry:a", "qrrecall:entry:b", "qrrecall:entry:c"]
    )
    assert rows == [good]


@pytest.mark.asyncio
async def test_list_all_empty_index(redis_client):
    redis_client.smembers.return_value = set()

    assert await EntryRepository().list_all() == []
    redis_client.mget.assert_not_called()


@pytest.mark.asyncio
async def test_exists(redis_client):
    redis_client.exists.return_value = 1
    assert await EntryRepository().exists("doc-1") is True
    redis_client.exists.assert_awaited_once_with("qrrecall:entry:doc-1")


@pytest.mark.asyncio
async def test_redis_errors_become_store_unavailable(redis_client):
    redis_client.smembers.side_effect = ConnectionError("down")
    redis_client.get.side_effect = ConnectionError("down")

    with pytest.raises(StoreUnavailable):
        await EntryRepository().list_all()
    with pytest.raises(StoreUnavailable):
        await ArtifactRepository().get("doc-1")


@pytest.mark.asyncio
async def test_artifact_put_and_get(redis_client):
    redis_client.get.return_value = b"<svg/>"
    repo = ArtifactRepository()

    await repo.put("doc-1", b"<svg/>")
    got = await repo.get("doc-1")

    redis_client.set.assert_awaited_once_with("qrrecall:artifact:doc-1", b"<svg/>")
    assert got == b"<svg/>"


@pytest.mark.asyncio
async def test_artifact_get_missing_returns_none(redis_client):
    redis_client.get.return_value = None
    assert await ArtifactRepository().get("doc-1") is None
