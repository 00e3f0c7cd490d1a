# core/embeddings.py
from functools import lru_cache
from typing import Any, Optional
import httpx
import numpy as np
from fastapi.concurrency import run_in_threadpool
from sentence_transformers import SentenceTransformer
from config.settings import settings
from core.contracts import EmbeddingProvider
from util.errors import EmbeddingUnavailable
from util.timing import timed
import logging

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _load_model() -> SentenceTransformer:
    """
    Lazy-load the sentence embedding model.

    Model is kept CPU-friendly; adjust in settings if you want a larger model.
    """
    name = settings.EMBEDDING_MODEL_NAME
    with timed(logger, "embed.model.load", model=name):
        model = SentenceTransformer(name, device=settings.EMBEDDING_DEVICE)
    return model


def _encode(text: str) -> list[float]:
    model = _load_model()
    vec = model.encode(
        [text], convert_to_numpy=True, normalize_embeddings=True
    ).astype(np.float32, copy=False)[0]
    return [float(x) for x in vec]


class LocalEmbeddingProvider:
    """
    In-process sentence-transformers encoder. Encoding runs in the threadpool so the
    event loop keeps serving other requests.
    """

    async def embed(self, text: str) -> list[float]:
        try:
            with timed(logger, "embed.local", chars=len(text)):
                return await run_in_threadpool(_encode, text)
        except Exception as e:
            logger.error("embed.local.error err=%s", type(e).__name__)
            raise EmbeddingUnavailable() from e


def _unwrap_vector(data: Any) -> list[float]:
    # Workers AI answers with either [[...]] (batched) or [...]
    if isinstance(data, list) and data and isinstance(data[0], list):
        data = data[0]
    if not isinstance(data, list) or not data:
        raise ValueError("embedding response carried no vector")
    return [float(x) for x in data]


class WorkersAIEmbeddingProvider:
    """
    Cloudflare Workers AI REST endpoint: POST {base}/accounts/{account}/ai/run/{model}.
    """

    def __init__(
        self,
        account_id: Optional[str] = settings.CF_ACCOUNT_ID,
        api_token: Optional[str] = settings.CF_API_TOKEN,
        model: str = settings.WORKERS_AI_MODEL,
        base_url: str = settings.WORKERS_AI_BASE_URL,
        timeout: float = settings.EMBEDDING_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not account_id or not api_token:
            raise ValueError("CF_ACCOUNT_ID and CF_API_TOKEN are required for workers_ai")
        self._url = f"{base_url.rstrip('/')}/accounts/{account_id}/ai/run/{model}"
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "content-type": "application/json",
        }
        self._model = model
        self._timeout = httpx.Timeout(timeout, connect=5.0)
        self._transport = transport

    async def embed(self, text: str) -> list[float]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                with timed(logger, "embed.workers_ai", model=self._model):
                    res = await client.post(
                        self._url, headers=self._headers, json={"text": text}
                    )
        except httpx.RequestError as e:
            logger.error("embed.workers_ai.request_error err=%s", type(e).__name__)
            raise EmbeddingUnavailable() from e

        if res.status_code // 100 != 2:
            logger.error("embed.workers_ai.bad_status status=%d", res.status_code)
            raise EmbeddingUnavailable()

        try:
            body = res.json()
            vec = _unwrap_vector((body.get("result") or {}).get("data"))
        except (ValueError, AttributeError, TypeError) as e:
            logger.error("embed.workers_ai.bad_payload err=%s", type(e).__name__)
            raise EmbeddingUnavailable() from e
        logger.debug("embed.workers_ai.ok d=%d", len(vec))
        return vec


@lru_cache(maxsize=1)
def get_embedding_provider() -> EmbeddingProvider:
    if settings.EMBEDDING_BACKEND == "workers_ai":
        return WorkersAIEmbeddingProvider()
    return LocalEmbeddingProvider()
