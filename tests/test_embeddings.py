"""Unit tests for the embedding providers."""

import json
from unittest.mock import MagicMock, patch

import httpx
import numpy as np
import pytest

from core.embeddings import LocalEmbeddingProvider, WorkersAIEmbeddingProvider
from util.errors import EmbeddingUnavailable


def _provider(handler) -> WorkersAIEmbeddingProvider:
    return WorkersAIEmbeddingProvider(
        account_id="acct",
        api_token="token",
        model="@cf/baai/bge-base-en-v1.5",
        base_url="https://ai.example/v4/",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_workers_ai_unwraps_batched_vector():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"result": {"shape": [1, 3], "data": [[0.1, 0.2, 0.3]]}})

    vec = await _provider(handler).embed("hello")

    assert vec == [0.1, 0.2, 0.3]
    assert seen["url"] == "https://ai.example/v4/accounts/acct/ai/run/@cf/baai/bge-base-en-v1.5"
    assert seen["auth"] == "Bearer token"
    assert seen["body"] == {"text": "hello"}


@pytest.mark.asyncio
async def test_workers_ai_accepts_flat_vector():
    def handler(request):
        return httpx.Response(200, json={"result": {"data": [1, 2]}})

    assert await _provider(handler).embed("x") == [1.0, 2.0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"errors": ["boom"]}),
        httpx.Response(200, json={"result": {"data": []}}),
        httpx.Response(200, json={"result": None}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_workers_ai_failures_become_embedding_unavailable(response):
    def handler(request):
        return response

    with pytest.raises(EmbeddingUnavailable):
        await _provider(handler).embed("x")


@pytest.mark.asyncio
async def test_workers_ai_network_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(EmbeddingUnavailable):
        await _provider(handler).embed("x")


def test_workers_ai_requires_credentials():
    with pytest.raises(ValueError):
        WorkersAIEmbeddingProvider(account_id=None, api_token=None)


@pytest.mark.asyncio
async def test_local_provider_encodes_single_text():
    model = MagicMock()
    model.encode.return_value = np.array([[0.6, 0.8]], dtype=np.float32)

    with patch("core.embeddings._load_model", return_value=model):
        vec = await LocalEmbeddingProvider().embed("hello")

    assert vec == pytest.approx([0.6, 0.8])
    assert model.encode.call_args.args[0] == ["hello"]
    assert model.encode.call_args.kwargs["normalize_embeddings"] is True


@pytest.mark.asyncio
async def test_local_provider_failure():
    with patch("core.embeddings._load_model", side_effect=OSError("no weights")):
        with pytest.raises(EmbeddingUnavailable):
            await LocalEmbeddingProvider().embed("hello")
