# core/contracts.py
"""
Collaborator interfaces the registration and retrieval services depend on.

Concrete adapters live in core.embeddings, core.qr_render and repository.*;
tests substitute in-memory fakes.
"""
from typing import Optional, Protocol, Sequence
from model.entry import Entry


class EmbeddingProvider(Protocol):
    async def embed(self, text: str) -> list[float]:
        """Raises EmbeddingUnavailable when the provider call fails."""
        ...


class EntryStore(Protocol):
    async def exists(self, entry_id: str) -> bool: ...

    async def insert(self, entry: Entry) -> None:
        """Raises DuplicateEntry if the id is taken, StoreUnavailable on failure."""
        ...

    async def list_all(self) -> Sequence[Entry]: ...


class ArtifactStore(Protocol):
    async def put(self, key: str, blob: bytes) -> None: ...

    async def get(self, key: str) -> Optional[bytes]: ...


class Renderer(Protocol):
    def render(self, text: str) -> bytes: ...
