# core/entities.py
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence


@dataclass(frozen=True)
class Candidate:
    id: str
    fingerprint: Sequence[float]


@dataclass(frozen=True)
class Match:
    id: str
    score: float


@dataclass
class MatchResult:
    """
    Accepted retrieval outcome with the QR code already resolved from the blob store.
    """

    id: str
    text: str
    created_at: datetime
    score: float
    artifact: bytes
