# controller/controller_dependencies.py
from core.embeddings import get_embedding_provider
from core.qr_render import QrSvgRenderer
from repository.artifact_repository import ArtifactRepository
from repository.entry_repository import EntryRepository
from service.registration_service import RegistrationService
from service.retrieval_service import RetrievalService


def get_registration_service() -> RegistrationService:
    _entries = EntryRepository()
    _artifacts = ArtifactRepository()
    _service = RegistrationService(
        _entries, _artifacts, get_embedding_provider(), QrSvgRenderer()
    )
    return _service


def get_retrieval_service() -> RetrievalService:
    _entries = EntryRepository()
    _artifacts = ArtifactRepository()
    _service = RetrievalService(_entries, _artifacts, get_embedding_provider())
    return _service
