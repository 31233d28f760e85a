"""Default values for memory configuration.

``MEMORY_DEFAULTS`` is the table applied by the builder at build time: each
entry is inserted only when its key is absent, so a caller-supplied value
always wins.

Three documented defaults are declared here but are deliberately absent
from ``MEMORY_DEFAULTS``: the merge and compaction memory fractions and the
minimum spillable-map size. A bare build therefore never contains them.
Consumers that need them must fall back to the constants themselves.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from hoodie.foundation.domain.config_keys import MemoryConfigKey

if TYPE_CHECKING:
    from collections.abc import Mapping

_MIB = 1024 * 1024
_GIB = 1024 * _MIB

DEFAULT_MAX_MEMORY_FRACTION_FOR_MERGE: str = str(0.6)
"""Max fraction of engine memory for hash-merge; excess spills to disk."""

DEFAULT_MAX_MEMORY_FRACTION_FOR_COMPACTION: str = str(0.6)
"""Max fraction of engine memory for compaction; excess spills to disk."""

DEFAULT_MAX_MEMORY_FOR_SPILLABLE_MAP_IN_BYTES: int = 1 * _GIB
DEFAULT_MIN_MEMORY_FOR_SPILLABLE_MAP_IN_BYTES: int = 100 * _MIB
DEFAULT_MAX_DFS_STREAM_BUFFER_SIZE: int = 16 * _MIB
DEFAULT_SPILLABLE_MAP_BASE_PATH: str = "/tmp/"

DEFAULT_WRITESTATUS_FAILURE_FRACTION: float = 0.1
"""Reporting every failure (1.0) can cause memory pressure and mask real errors."""

MEMORY_DEFAULTS: Mapping[str, str] = MappingProxyType(
    {
        MemoryConfigKey.MAX_DFS_STREAM_BUFFER_SIZE.value: str(DEFAULT_MAX_DFS_STREAM_BUFFER_SIZE),
        MemoryConfigKey.SPILLABLE_MAP_BASE_PATH.value: DEFAULT_SPILLABLE_MAP_BASE_PATH,
        MemoryConfigKey.MAX_MEMORY_FOR_MERGE.value: str(
            DEFAULT_MAX_MEMORY_FOR_SPILLABLE_MAP_IN_BYTES
        ),
        MemoryConfigKey.WRITESTATUS_FAILURE_FRACTION.value: str(
            DEFAULT_WRITESTATUS_FAILURE_FRACTION
        ),
    }
)
"""Build-time defaults keyed by MemoryConfigKey string value (read-only)."""
