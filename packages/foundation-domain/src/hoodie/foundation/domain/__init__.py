"""Hoodie Foundation Domain -- configuration keys, defaults and errors.

Pure Python building blocks shared by every configuration consumer:
the key registry, the build-time default table and the exception hierarchy.
"""

from hoodie.foundation.domain.config_defaults import (
    DEFAULT_MAX_DFS_STREAM_BUFFER_SIZE,
    DEFAULT_MAX_MEMORY_FOR_SPILLABLE_MAP_IN_BYTES,
    DEFAULT_MAX_MEMORY_FRACTION_FOR_COMPACTION,
    DEFAULT_MAX_MEMORY_FRACTION_FOR_MERGE,
    DEFAULT_MIN_MEMORY_FOR_SPILLABLE_MAP_IN_BYTES,
    DEFAULT_SPILLABLE_MAP_BASE_PATH,
    DEFAULT_WRITESTATUS_FAILURE_FRACTION,
    MEMORY_DEFAULTS,
)
from hoodie.foundation.domain.config_keys import ConfigKey, MemoryConfigKey
from hoodie.foundation.domain.exceptions import (
    BuilderFinalizedError,
    ConfigKeyNotFoundError,
    DomainError,
    InvalidStateTransitionError,
    NotFoundError,
    PropertiesFormatError,
    ValidationError,
)

__all__ = [
    "DEFAULT_MAX_DFS_STREAM_BUFFER_SIZE",
    "DEFAULT_MAX_MEMORY_FOR_SPILLABLE_MAP_IN_BYTES",
    "DEFAULT_MAX_MEMORY_FRACTION_FOR_COMPACTION",
    "DEFAULT_MAX_MEMORY_FRACTION_FOR_MERGE",
    "DEFAULT_MIN_MEMORY_FOR_SPILLABLE_MAP_IN_BYTES",
    "DEFAULT_SPILLABLE_MAP_BASE_PATH",
    "DEFAULT_WRITESTATUS_FAILURE_FRACTION",
    "MEMORY_DEFAULTS",
    "BuilderFinalizedError",
    "ConfigKey",
    "ConfigKeyNotFoundError",
    "DomainError",
    "InvalidStateTransitionError",
    "MemoryConfigKey",
    "NotFoundError",
    "PropertiesFormatError",
    "ValidationError",
]
