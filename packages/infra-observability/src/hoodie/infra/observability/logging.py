"""Structured logging configuration using structlog.

This module provides environment-aware structured logging with:
- JSON output for production environments
- Console output with colors for development
- Redaction of secret-looking configuration values

Property files routinely sit next to credentials (storage access keys,
metastore passwords). Any event field, or entry of a ``properties`` mapping
attached to an event, whose name looks secret is replaced before rendering.

Usage:
    # During process startup
    from hoodie.infra.observability.logging import configure_logging
    configure_logging()

    # In application code
    from hoodie.infra.observability import get_logger
    logger = get_logger(__name__)
    logger.info("memory_config_loaded", properties=dict(config))
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import MutableMapping

Processor = structlog.types.Processor

# Substrings that mark a key as secret (matched case-insensitively)
SECRET_KEY_MARKERS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "credential",
        "access.key",
        "access_key",
        "api_key",
        "apikey",
    }
)

REDACTED_VALUE: str = "***REDACTED***"

PROPERTIES_FIELD: str = "properties"


class LoggingSettings(BaseSettings):
    """Logging configuration settings from environment variables.

    Loads configuration from environment variables:
    - LOG_LEVEL: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment name (development, staging, production, test)

    Attributes:
        log_level: Minimum log level to output. Default: INFO
        environment: Environment name for format selection. Default: development

    Example:
        >>> LoggingSettings(environment="production").use_json_logs
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Minimum log level to output",
    )
    environment: str = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Environment name for format selection",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if isinstance(v, str):
            return v.upper()
        return str(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level.

        Raises:
            ValueError: If log level is not a valid Python logging level.
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            msg = f"log_level must be one of {sorted(valid_levels)}"
            raise ValueError(msg)
        return v

    @property
    def use_json_logs(self) -> bool:
        return self.environment == "production"

    @property
    def log_level_int(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def is_secret_key(key: str) -> bool:
    """Return True when a field or property name looks like it holds a secret.

    Example:
        >>> is_secret_key("fs.s3a.secret.key")
        True
        >>> is_secret_key("hoodie.memory.merge.fraction")
        False
    """
    key_lower = key.lower()
    return any(marker in key_lower for marker in SECRET_KEY_MARKERS)


class SecretPropertyRedactor:
    """Structlog processor that hides secret values before rendering.

    Redacts:
    1. Top-level event fields whose name looks secret
    2. Entries of a ``properties`` mapping whose key looks secret (the
       mapping is copied, the caller's object is never modified)

    Example:
        >>> redactor = SecretPropertyRedactor()
        >>> event = {"event": "loaded", "properties": {"db.password": "x", "a": "1"}}
        >>> redactor(None, "info", event)["properties"]
        {'db.password': '***REDACTED***', 'a': '1'}
    """

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key in list(event_dict.keys()):
            if key != PROPERTIES_FIELD and is_secret_key(key):
                event_dict[key] = REDACTED_VALUE

        properties = event_dict.get(PROPERTIES_FIELD)
        if isinstance(properties, Mapping):
            event_dict[PROPERTIES_FIELD] = {
                name: REDACTED_VALUE if is_secret_key(str(name)) else value
                for name, value in properties.items()
            }
        return event_dict


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached LoggingSettings instance.

    Clear cache with ``get_logging_settings.cache_clear()`` for testing.
    """
    return LoggingSettings()


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog for structured logging.

    Configures structlog with:
    - Context variable merging
    - Log level filtering
    - ISO 8601 timestamps (UTC)
    - Secret redaction
    - Environment-aware rendering (JSON for production, console otherwise)

    Also sets the stdlib root level so ``logging.getLogger`` records emitted
    by the builder follow the same threshold.

    Args:
        settings: Optional LoggingSettings instance. If not provided,
            settings are loaded from environment variables.
    """
    if settings is None:
        settings = get_logging_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        SecretPropertyRedactor(),
        structlog.processors.format_exc_info,
    ]

    if settings.use_json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_int),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.getLogger().setLevel(settings.log_level_int)


def get_logger(name: str | None = None) -> structlog.typing.WrappedLogger:
    """Get a structlog logger bound to the given name.

    Args:
        name: Logger name (typically __name__ from calling module).
            If None, returns unbound logger.

    Returns:
        Bound structlog logger with name context.
    """
    logger = structlog.get_logger()
    if name is not None:
        logger = logger.bind(logger=name)
    return logger
