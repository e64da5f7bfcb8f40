"""Global configuration for abistruct.

This module provides centralized configuration management with support for
environment variables and sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AbistructConfig(BaseSettings):
    """abistruct configuration settings.

    Values can be overridden via environment variables with ABISTRUCT_ prefix.
    Example: ABISTRUCT_SYNTHETIC_NAME_PREFIX=Struct_ overrides synthetic_name_prefix.
    """

    # Declaration naming
    synthetic_name_prefix: str = Field(
        default="S_",
        min_length=1,
        description="Prefix of names synthesized for structs without a name hint",
    )
    strict_identifiers: bool = Field(
        default=True,
        description="Fail when two differently shaped structs share one identifier",
    )

    # Output
    json_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation used when exporting catalogues as JSON",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level used by the CLI when not running verbose",
    )

    model_config = {
        "env_prefix": "ABISTRUCT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("synthetic_name_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"synthetic_name_prefix must be a valid identifier: {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache
def get_config() -> AbistructConfig:
    """Get cached configuration instance.

    Returns:
        AbistructConfig singleton instance.
    """
    return AbistructConfig()


def reload_config() -> AbistructConfig:
    """Reload configuration (clears cache).

    Returns:
        Fresh AbistructConfig instance.
    """
    get_config.cache_clear()
    return get_config()
