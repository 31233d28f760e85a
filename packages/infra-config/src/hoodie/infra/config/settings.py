"""Memory configuration overrides from the environment.

Settings are loaded from environment variables with the ``HOODIE_MEMORY_``
prefix (or a ``.env`` file). Every field is optional: only the values that
are explicitly set become overrides, so unset fields never mask a property
file value or a build-time default.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hoodie.foundation.domain.config_keys import MemoryConfigKey

_FIELD_KEYS: dict[str, MemoryConfigKey] = {
    "merge_fraction": MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_MERGE,
    "compaction_fraction": MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_COMPACTION,
    "merge_max_size": MemoryConfigKey.MAX_MEMORY_FOR_MERGE,
    "compaction_max_size": MemoryConfigKey.MAX_MEMORY_FOR_COMPACTION,
    "dfs_buffer_max_size": MemoryConfigKey.MAX_DFS_STREAM_BUFFER_SIZE,
    "spillable_map_path": MemoryConfigKey.SPILLABLE_MAP_BASE_PATH,
    "writestatus_failure_fraction": MemoryConfigKey.WRITESTATUS_FAILURE_FRACTION,
}


class MemoryConfigSettings(BaseSettings):
    """Environment-driven sources for the memory configuration.

    Environment Variables:
        HOODIE_MEMORY_PROPERTIES_FILE: Property file loaded first (optional)
        HOODIE_MEMORY_MERGE_FRACTION: hoodie.memory.merge.fraction
        HOODIE_MEMORY_COMPACTION_FRACTION: hoodie.memory.compaction.fraction
        HOODIE_MEMORY_MERGE_MAX_SIZE: hoodie.memory.merge.max.size (bytes)
        HOODIE_MEMORY_COMPACTION_MAX_SIZE: hoodie.memory.compaction.max.size (bytes)
        HOODIE_MEMORY_DFS_BUFFER_MAX_SIZE: hoodie.memory.dfs.buffer.max.size (bytes)
        HOODIE_MEMORY_SPILLABLE_MAP_PATH: hoodie.memory.spillable.map.path
        HOODIE_MEMORY_WRITESTATUS_FAILURE_FRACTION:
            hoodie.memory.writestatus.failure.fraction

    Values are type-checked (a fraction must be a number) but not
    range-checked, matching the builder.

    Example:
        >>> settings = MemoryConfigSettings(merge_fraction=0.5)
        >>> settings.to_overrides()
        {'hoodie.memory.merge.fraction': '0.5'}
    """

    model_config = SettingsConfigDict(
        env_prefix="HOODIE_MEMORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    properties_file: Path | None = Field(
        default=None,
        description="Property file merged before environment overrides",
    )
    merge_fraction: float | None = Field(
        default=None,
        description="Fraction of engine memory usable by merge",
    )
    compaction_fraction: float | None = Field(
        default=None,
        description="Fraction of engine memory usable by compaction",
    )
    merge_max_size: int | None = Field(
        default=None,
        description="Absolute byte ceiling for merge",
    )
    compaction_max_size: int | None = Field(
        default=None,
        description="Absolute byte ceiling for compaction",
    )
    dfs_buffer_max_size: int | None = Field(
        default=None,
        description="Upper bound on the DFS read-ahead buffer in bytes",
    )
    spillable_map_path: str | None = Field(
        default=None,
        description="Directory prefix for spilled map entries",
    )
    writestatus_failure_fraction: float | None = Field(
        default=None,
        description="Fraction of failed records reported upstream",
    )

    def to_overrides(self) -> dict[str, str]:
        """Return the explicitly set values keyed by config key string.

        Returns:
            Mapping of config key to the string form of each set value.
            Fields left at ``None`` are omitted.
        """
        overrides: dict[str, str] = {}
        for field_name, key in _FIELD_KEYS.items():
            value = getattr(self, field_name)
            if value is not None:
                overrides[key.value] = str(value)
        return overrides


@lru_cache(maxsize=1)
def get_memory_config_settings() -> MemoryConfigSettings:
    """Get cached memory configuration settings singleton.

    Returns:
        MemoryConfigSettings instance loaded from environment.
    """
    return MemoryConfigSettings()
