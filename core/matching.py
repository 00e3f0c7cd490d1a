# core/matching.py
import math
from typing import Iterable, Optional, Protocol, Sequence
from core.entities import Candidate, Match
from core.similarity import DegenerateVector, as_fingerprint, cosine_similarity
import logging

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.6


class MatchStrategy(Protocol):
    def best(
        self, query: Sequence[float], candidates: Iterable[Candidate]
    ) -> Optional[Match]:
        """Highest scoring candidate regardless of threshold, or None if nothing scored."""
        ...


class LinearScanStrategy:
    """
    Exhaustive scan: every candidate is scored exactly once.

    Candidates are ordered by id before scanning and a later candidate must score
    strictly higher to replace the current best, so ties go to the smallest id no
    matter what order the store listed rows in.
    """

    def best(
        self, query: Sequence[float], candidates: Iterable[Candidate]
    ) -> Optional[Match]:
        best: Optional[Match] = None
        for cand in sorted(candidates, key=lambda c: c.id):
            try:
                score = cosine_similarity(query, cand.fingerprint)
            except DegenerateVector:
                # Cannot win; equivalent to the lowest possible similarity
                logger.warning("match.candidate.degenerate id=%s", cand.id)
                continue
            if not math.isfinite(score):
                logger.warning("match.candidate.nonfinite id=%s", cand.id)
                continue
            if best is None or score > best.score:
                best = Match(id=cand.id, score=score)
        return best


def select_best(
    query: Sequence[float],
    candidates: Sequence[Candidate],
    threshold: float = DEFAULT_THRESHOLD,
    strategy: Optional[MatchStrategy] = None,
) -> Optional[Match]:
    """
    Pick the single best candidate and accept it only if score >= threshold.

    Returns None for an empty collection and for a best score below threshold.
    A degenerate query raises DegenerateVector; a candidate whose length differs
    from the query raises DimensionMismatch.
    """
    as_fingerprint(query)
    if not candidates:
        return None

    found = (strategy or LinearScanStrategy()).best(query, candidates)
    if found is None:
        logger.info("match.none scored=0 candidates=%d", len(candidates))
        return None
    if found.score < threshold:
        logger.info(
            "match.rejected id=%s score=%.4f threshold=%.2f",
            found.id,
            found.score,
            threshold,
        )
        return None
    return found
