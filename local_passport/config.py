"""
Configuration - Settings loaded from the environment.

Every field can be overridden with a LOCAL_PASSPORT_ prefixed variable,
e.g. LOCAL_PASSPORT_JWT_SECRET or LOCAL_PASSPORT_MIN_PASSWORD_LENGTH.
"""

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]


class AuthSettings(BaseSettings):
    """Runtime settings for the local authentication stack."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LOCAL_PASSPORT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Tokens
    jwt_secret: SecretStr = SecretStr("change-me")
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "local-passport"
    token_ttl: int = Field(default=3600, gt=0)

    # Sessions
    session_ttl: int = Field(default=3600, gt=0)
    session_max_duration: int = Field(default=86400, gt=0)

    # Local protocol
    min_password_length: int = Field(default=8, ge=1)

    # Redis-backed stores
    redis_url: str = "redis://localhost:6379/0"
    redis_prefix: str = "passport:"

    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache
def get_settings() -> AuthSettings:
    """Return the process-wide settings instance."""
    return AuthSettings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for scripts and examples.

    Library modules only create loggers; applications decide handlers.
    """
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
