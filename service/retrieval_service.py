# service/retrieval_service.py
from typing import Optional
from config.settings import settings
from core.contracts import ArtifactStore, EmbeddingProvider, EntryStore
from core.entities import Candidate, MatchResult
from core.matching import MatchStrategy, select_best
from core.similarity import check_dimensions
from util.errors import ArtifactMissing
from util.timing import timed
import logging

logger = logging.getLogger(__name__)


class RetrievalService:
    def __init__(
        self,
        entries: EntryStore,
        artifacts: ArtifactStore,
        embedder: EmbeddingProvider,
        strategy: Optional[MatchStrategy] = None,
        threshold: float = settings.MATCH_THRESHOLD,
        dimensions: Optional[int] = settings.EMBEDDING_DIMENSIONS,
    ) -> None:
        self._entries = entries
        self._artifacts = artifacts
        self._embedder = embedder
        self._strategy = strategy
        self._threshold = threshold
        self._dimensions = dimensions

    async def query(self, prompt: str) -> Optional[MatchResult]:
        """
        Embed the prompt, scan every stored entry and resolve the winner's QR code.

        Returns None when nothing qualifies (empty collection or best score below
        threshold). Raises EmbeddingUnavailable / StoreUnavailable from collaborators,
        DimensionMismatch / DegenerateVector from scoring, and ArtifactMissing when the
        winning row has no stored QR code.
        Logs: sizes, ids and scores only (no payloads).
        """
        query_vec = await self._embedder.embed(prompt)
        check_dimensions(query_vec, self._dimensions)

        with timed(logger, "retrieval.load"):
            rows = await self._entries.list_all()
        if not rows:
            logger.info("retrieval.empty")
            return None

        by_id = {row.id: row for row in rows}
        candidates = [Candidate(id=row.id, fingerprint=row.fingerprint) for row in rows]
        with timed(logger, "retrieval.select", n=len(candidates)):
            match = select_best(
                query_vec, candidates, threshold=self._threshold, strategy=self._strategy
            )
        if match is None:
            logger.info("retrieval.no_match n=%d", len(candidates))
            return None

        artifact = await self._artifacts.get(match.id)
        if artifact is None:
            logger.error("retrieval.artifact.missing id=%s", match.id)
            raise ArtifactMissing(f"QR code for entry '{match.id}' is missing")

        row = by_id[match.id]
        logger.info("retrieval.ok id=%s score=%.4f", match.id, match.score)
        return MatchResult(
            id=row.id,
            text=row.text,
            created_at=row.createdAt,
            score=match.score,
            artifact=artifact,
        )
