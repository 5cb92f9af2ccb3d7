"""
Runtime settings for neo-authz.

Library-level knobs loaded from the environment (prefix ``NEO_AUTHZ_``) or a
``.env`` file. Provider configuration is not read here; it is handed to the
orchestrator by the application that bootstraps it.
"""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthzSettings(BaseSettings):
    """Settings shared by the orchestrator and its sub-flows."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_AUTHZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Credentials expiring within this window are renewed by a non-forced refresh
    credential_expiry_skew_seconds: int = Field(default=300, ge=0)

    # Lifecycle event logging
    lifecycle_log_level: str = Field(default="DEBUG")
    log_rejected_transitions: bool = Field(default=True)

    @field_validator("lifecycle_log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level


@lru_cache()
def get_settings() -> AuthzSettings:
    """Get cached settings instance."""
    return AuthzSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
