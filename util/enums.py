# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    code: str
    message: str
    http_status: int


class ErrorMessage(Enum):
    VALIDATION_ERROR = ErrorInfo(
        "validation_error", "Validation failed", status.HTTP_400_BAD_REQUEST
    )
    NO_MATCH = ErrorInfo(
        "no_match", "No sufficiently similar entry found", status.HTTP_404_NOT_FOUND
    )
    DUPLICATE_ENTRY = ErrorInfo(
        "duplicate_entry", "An entry with this ID already exists", status.HTTP_409_CONFLICT
    )
    EMBEDDING_UNAVAILABLE = ErrorInfo(
        "embedding_unavailable",
        "Embedding provider unavailable",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    STORE_UNAVAILABLE = ErrorInfo(
        "store_unavailable", "Storage unavailable", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    ARTIFACT_MISSING = ErrorInfo(
        "artifact_missing",
        "Matched entry has no stored QR code",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    DIMENSION_MISMATCH = ErrorInfo(
        "dimension_mismatch",
        "Fingerprint dimensionality mismatch",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    DEGENERATE_VECTOR = ErrorInfo(
        "degenerate_vector",
        "Fingerprint cannot be compared",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    TIMEOUT = ErrorInfo("timeout", "Request timed out", status.HTTP_504_GATEWAY_TIMEOUT)
    INTERNAL_ERROR = ErrorInfo(
        "internal_error", "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
