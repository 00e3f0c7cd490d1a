# service/registration_service.py
from typing import Optional
from config.settings import settings
from core.contracts import ArtifactStore, EmbeddingProvider, EntryStore, Renderer
from core.similarity import as_fingerprint, check_dimensions
from model.entry import Entry
from util.errors import DuplicateEntry
from util.timing import timed
import logging

logger = logging.getLogger(__name__)


class RegistrationService:
    """
    render -> put artifact -> embed -> insert row.

    Both writes are keyed by the entry id. There is no rollback: if embedding or the
    row insert fails, the artifact stays behind and a retry of the same registration
    simply overwrites it.
    """

    def __init__(
        self,
        entries: EntryStore,
        artifacts: ArtifactStore,
        embedder: EmbeddingProvider,
        renderer: Renderer,
        dimensions: Optional[int] = settings.EMBEDDING_DIMENSIONS,
    ) -> None:
        self._entries = entries
        self._artifacts = artifacts
        self._embedder = embedder
        self._renderer = renderer
        self._dimensions = dimensions

    async def register(self, entry_id: str, text: str) -> Entry:
        # Checked before any write so an existing entry's QR code is never replaced
        if await self._entries.exists(entry_id):
            logger.warning("register.duplicate id=%s", entry_id)
            raise DuplicateEntry(f"Entry '{entry_id}' already exists")

        with timed(logger, "register.render", chars=len(text)):
            svg = self._renderer.render(text)
        await self._artifacts.put(entry_id, svg)

        try:
            fingerprint = await self._embedder.embed(text)
            check_dimensions(fingerprint, self._dimensions)
            as_fingerprint(fingerprint)
        except Exception:
            logger.error("register.embed.error id=%s artifact_orphaned=true", entry_id)
            raise

        entry = Entry(id=entry_id, text=text, fingerprint=fingerprint)
        try:
            await self._entries.insert(entry)
        except DuplicateEntry:
            # Lost a race with a concurrent registration of the same id
            logger.warning("register.duplicate.race id=%s", entry_id)
            raise
        except Exception:
            logger.error("register.persist.error id=%s artifact_orphaned=true", entry_id)
            raise

        logger.info(
            "register.ok id=%s chars=%d d=%d", entry_id, len(text), len(fingerprint)
        )
        return entry
