"""Startup assembly of the memory configuration.

Sources are merged in increasing precedence:

1. Property file named by ``HOODIE_MEMORY_PROPERTIES_FILE`` (if any)
2. ``HOODIE_MEMORY_*`` environment overrides
3. Overrides passed by the caller (e.g., parsed command-line options)

Build-time defaults fill whatever is still unset.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hoodie.foundation.application.memory_config import MemoryConfig
from hoodie.foundation.domain.exceptions import PropertiesFormatError
from hoodie.infra.config.settings import MemoryConfigSettings, get_memory_config_settings
from hoodie.infra.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping


def load_memory_config(
    settings: MemoryConfigSettings | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> MemoryConfig:
    """Assemble and build the memory configuration.

    Args:
        settings: Optional settings instance. If not provided, settings are
            loaded from the environment (cached).
        overrides: Optional highest-precedence key/value overrides.

    Returns:
        Fully defaulted, immutable MemoryConfig.

    Raises:
        OSError: If the configured property file cannot be read.
        PropertiesFormatError: If the configured property file is malformed.
    """
    logger = get_logger(__name__)
    if settings is None:
        settings = get_memory_config_settings()

    builder = MemoryConfig.new_builder()
    if settings.properties_file is not None:
        try:
            builder.from_file(settings.properties_file)
        except (OSError, PropertiesFormatError) as e:
            logger.error(
                "memory_config_file_unreadable",
                path=str(settings.properties_file),
                error=str(e),
            )
            raise

    builder.from_properties(settings.to_overrides())
    if overrides:
        builder.from_properties(overrides)

    config = builder.build()
    logger.info(
        "memory_config_loaded",
        properties_file=str(settings.properties_file) if settings.properties_file else None,
        properties=dict(config),
    )
    return config
