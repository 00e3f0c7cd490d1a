# model/entry.py
from datetime import datetime, timezone
from pydantic import BaseModel, Field
from util.constants import Limits


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Entry(BaseModel):
    """
    Durable unit of registered content. Created once by registration, never updated.
    """

    id: str = Field(min_length=1, max_length=Limits.ID_MAX, pattern=Limits.ID_PATTERN)
    text: str = Field(min_length=1, max_length=Limits.TEXT_MAX)
    fingerprint: list[float] = Field(min_length=1)
    createdAt: datetime = Field(default_factory=_utcnow)
