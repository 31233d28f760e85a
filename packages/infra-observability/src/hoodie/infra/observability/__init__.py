"""Hoodie Infra Observability -- structlog logging."""

from __future__ import annotations

from hoodie.infra.observability.logging import (
    LoggingSettings,
    SecretPropertyRedactor,
    configure_logging,
    get_logger,
    get_logging_settings,
    is_secret_key,
)

__all__ = [
    "LoggingSettings",
    "SecretPropertyRedactor",
    "configure_logging",
    "get_logger",
    "get_logging_settings",
    "is_secret_key",
]
