from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_lowercase, to_header_name


class Settings(BaseSettings):
    """
    ctxlog settings loaded from the environment (prefix ``CTXLOG_``) or a ``.env`` file.
    """

    # Output mode used by init_logger() when no explicit `output` is passed
    OUTPUT_FORMAT: Literal["text", "json"] = "text"

    # Minimum severity emitted; "silly" lets everything through
    LOG_LEVEL: Literal["error", "warn", "info", "http", "verbose", "debug", "silly"] = "silly"

    # ANSI colors on text lines (JSON lines are never colored)
    COLOR: bool = True

    # Request id propagation
    REQUEST_ID_HEADER: str = "X-Request-ID"
    TRUST_REQUEST_ID_HEADER: bool = False

    # --- Validators ---
    @field_validator("OUTPUT_FORMAT", "LOG_LEVEL", mode="before")
    def normalize_lowercase(cls, v):
        """
        Normalize OUTPUT_FORMAT / LOG_LEVEL to lowercase before Literal validation,
        so CTXLOG_LOG_LEVEL=DEBUG and CTXLOG_OUTPUT_FORMAT=JSON are accepted.
        """
        return to_lowercase(v)

    @field_validator("REQUEST_ID_HEADER", mode="before")
    def normalize_header(cls, v):
        return to_header_name(v)

    model_config = SettingsConfigDict(
        env_prefix="CTXLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached. Tests call get_settings.cache_clear() after changing env vars.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
