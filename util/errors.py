# util/errors.py
from typing import Optional
from fastapi import HTTPException, status
from util.enums import ErrorInfo, ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self,
        message: str,
        http_status: int = status.HTTP_400_BAD_REQUEST,
        code: str = "bad_request",
    ) -> None:
        super().__init__(status_code=http_status, detail=message)
        self.code = code

    @classmethod
    def of(cls, info: ErrorInfo, message: Optional[str] = None) -> "AppError":
        return cls(message or info.message, info.http_status, info.code)


class _KnownError(AppError):
    kind: ErrorMessage = ErrorMessage.INTERNAL_ERROR

    def __init__(self, message: Optional[str] = None) -> None:
        info = self.kind.value
        super().__init__(message or info.message, info.http_status, info.code)


class DuplicateEntry(_KnownError):
    kind = ErrorMessage.DUPLICATE_ENTRY


class EmbeddingUnavailable(_KnownError):
    kind = ErrorMessage.EMBEDDING_UNAVAILABLE


class StoreUnavailable(_KnownError):
    kind = ErrorMessage.STORE_UNAVAILABLE


class ArtifactMissing(_KnownError):
    """Row exists but its rendered QR code does not: a consistency fault, not a miss."""

    kind = ErrorMessage.ARTIFACT_MISSING
