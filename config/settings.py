# config/settings.py
import os
import sys
from typing import Literal, Optional
from dotenv import load_dotenv
from pydantic import ValidationError, Field, field_validator
from pydantic_settings import BaseSettings
from util.enums import Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")
    REQUEST_TIMEOUT_SECONDS: float = Field(
        default=30.0, validation_alias="REQUEST_TIMEOUT_SECONDS"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_ENABLED: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")
    RATE_LIMIT_TIMES: int = Field(..., validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(..., validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(..., validation_alias="TRUST_PROXY")

    # Matching
    MATCH_THRESHOLD: float = Field(default=0.6, validation_alias="MATCH_THRESHOLD")

    # Embedding Engine
    EMBEDDING_BACKEND: Literal["local", "workers_ai"] = Field(
        default="local", validation_alias="EMBEDDING_BACKEND"
    )
    EMBEDDING_MODEL_NAME: str = "BAAI/bge-base-en-v1.5"
    EMBEDDING_DEVICE: str = "cpu"
    EMBEDDING_DIMENSIONS: Optional[int] = Field(
        default=None, validation_alias="EMBEDDING_DIMENSIONS"
    )
    EMBEDDING_TIMEOUT_SECONDS: float = 20.0

    # Cloudflare Workers AI (EMBEDDING_BACKEND=workers_ai)
    CF_ACCOUNT_ID: Optional[str] = Field(default=None, validation_alias="CF_ACCOUNT_ID")
    CF_API_TOKEN: Optional[str] = Field(default=None, validation_alias="CF_API_TOKEN")
    WORKERS_AI_BASE_URL: str = "https://api.cloudflare.com/client/v4"
    WORKERS_AI_MODEL: str = "@cf/baai/bge-base-en-v1.5"

    # QR rendering
    QR_ERROR_LEVEL: Literal["L", "M", "Q", "H"] = "M"
    QR_BORDER: int = 4
    QR_SCALE: int = 8
    QR_DARK: str = "#000000"
    QR_LIGHT: str = "#ffffff"

    # Logging knobs
    LOGGER_NAME: str = "qr-recall"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @field_validator("MATCH_THRESHOLD")
    @classmethod
    def _threshold_in_range(cls, v: float) -> float:
        # Cosine similarity never leaves [-1, 1]
        if not -1.0 <= v <= 1.0:
            raise ValueError("MATCH_THRESHOLD must be within [-1, 1]")
        return v


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
