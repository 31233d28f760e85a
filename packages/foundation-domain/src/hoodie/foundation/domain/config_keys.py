"""Configuration keys for memory-related tuning.

ConfigKey is an extensible StrEnum base class. Each subsystem subclasses it
with its own literal keys so that keys stay unique, stable strings that are
never generated at runtime.

Example:
    Extending ConfigKey for another subsystem::

        from hoodie.foundation.domain.config_keys import ConfigKey

        class IndexConfigKey(ConfigKey):
            BLOOM_NUM_ENTRIES = "hoodie.index.bloom.num_entries"
"""

from __future__ import annotations

from enum import StrEnum


class ConfigKey(StrEnum):
    """Extensible registry of configuration keys.

    This is an empty base class. Subsystems extend it with their own keys,
    organized under a dotted ``hoodie.<subsystem>.*`` namespace.
    """


class MemoryConfigKey(ConfigKey):
    """Keys governing memory used by merge, compaction and spillable maps.

    - ``MAX_MEMORY_FRACTION_FOR_MERGE``: multiplied with the engine's heap
      fraction to bound the in-memory buffer used during merge.
    - ``MAX_MEMORY_FRACTION_FOR_COMPACTION``: same, for compaction.
    - ``MAX_MEMORY_FOR_MERGE`` / ``MAX_MEMORY_FOR_COMPACTION``: absolute
      byte ceilings, used when no engine heap fraction is available.
    - ``MAX_DFS_STREAM_BUFFER_SIZE``: upper bound on the read-ahead buffer
      for remote file reads.
    - ``SPILLABLE_MAP_BASE_PATH``: directory prefix where spillable maps
      persist entries that overflow memory.
    - ``WRITESTATUS_FAILURE_FRACTION``: fraction of failed records whose
      details are reported back upstream.
    """

    MAX_MEMORY_FRACTION_FOR_MERGE = "hoodie.memory.merge.fraction"
    MAX_MEMORY_FRACTION_FOR_COMPACTION = "hoodie.memory.compaction.fraction"
    MAX_MEMORY_FOR_MERGE = "hoodie.memory.merge.max.size"
    MAX_MEMORY_FOR_COMPACTION = "hoodie.memory.compaction.max.size"
    MAX_DFS_STREAM_BUFFER_SIZE = "hoodie.memory.dfs.buffer.max.size"
    SPILLABLE_MAP_BASE_PATH = "hoodie.memory.spillable.map.path"
    WRITESTATUS_FAILURE_FRACTION = "hoodie.memory.writestatus.failure.fraction"
