from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for logging setup and the FastAPI error handlers.

    Notes:
      - Read from ERRX_* environment variables or a local .env file.
      - The core constructors (new, wrap, with_*) never read settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="ERRX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = Field(default="INFO")

    # ---- Error responses ----
    DEFAULT_HTTP_CODE: int = Field(default=500, description="Status used when no http_code is set")
    DEFAULT_ERROR_CODE: str = Field(default="internal_error")
    EXPOSE_CAUSE: bool = Field(default=False, description="Include the cause's text in responses")
    REQUEST_ID_HEADER: str = Field(default="X-Request-ID")

    @field_validator("DEFAULT_HTTP_CODE")
    @classmethod
    def _http_error_status(cls, v: int) -> int:
        if not 400 <= v <= 599:
            raise ValueError("DEFAULT_HTTP_CODE must be a 4xx or 5xx status")
        return int(v)

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"

    @field_validator("REQUEST_ID_HEADER")
    @classmethod
    def _header_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("REQUEST_ID_HEADER must not be empty")
        return v.strip()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
