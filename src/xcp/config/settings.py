# src/xcp/config/settings.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""xcp Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated configuration for the logging integration of the xcp
    error library. Domain code (errors and the chain renderer) never reads the
    environment; infrastructure reads `Settings` through `get_settings()` and
    passes plain values down.

Design:
    - Pydantic v2 BaseSettings with `extra='forbid'` to catch unknown fields.
    - Explicit field declarations with constrained types and ranges.
    - Environment enumeration for behavior toggles (includes TEST).
    - Singleton accessor `get_settings()` with LRU cache.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from xcp.domain.services.chain_renderer import DEFAULT_MAX_CHAIN_DEPTH

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "text"]


class Environment(str, Enum):
    """Logical deployment environment of the host application."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed configuration for xcp.

    Every field is read from an ``XCP_``-prefixed environment variable.
    """

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="XCP_ENVIRONMENT",
    )

    log_level: LogLevel = Field(
        default="INFO",
        description="Root log level installed by configure_root_logging().",
        validation_alias="XCP_LOG_LEVEL",
    )

    log_format: LogFormat = Field(
        default="json",
        description="Root handler format: one JSON object per line, or plain text.",
        validation_alias="XCP_LOG_FORMAT",
    )

    max_chain_depth: int = Field(
        default=DEFAULT_MAX_CHAIN_DEPTH,
        ge=1,
        le=10_000,
        description="Maximum number of causes rendered below a logged error.",
        validation_alias="XCP_MAX_CHAIN_DEPTH",
    )

    model_config = SettingsConfigDict(
        extra="forbid",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        """Accept level names in any case (``debug`` → ``DEBUG``)."""
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_log_format(cls, value: Any) -> Any:
        """Accept format names in any case."""
        return value.strip().lower() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Returns:
        Settings: Validated settings.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        logger.exception("Invalid xcp configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    logger.debug(
        "Settings initialized",
        extra={
            "extra": {
                "environment": settings.environment.value,
                "log_level": settings.log_level,
                "log_format": settings.log_format,
                "max_chain_depth": settings.max_chain_depth,
            }
        },
    )
    return settings
