"""Tests for configuration keys."""

from __future__ import annotations

import pytest

from hoodie.foundation.domain.config_keys import ConfigKey, MemoryConfigKey


@pytest.mark.unit
class TestConfigKey:
    """Tests for ConfigKey extensible enum."""

    def test_is_empty_base(self) -> None:
        assert len(list(ConfigKey)) == 0

    def test_extensible(self) -> None:
        class IndexKey(ConfigKey):
            BLOOM_ENTRIES = "hoodie.index.bloom.num_entries"

        assert IndexKey.BLOOM_ENTRIES == "hoodie.index.bloom.num_entries"
        assert isinstance(IndexKey.BLOOM_ENTRIES, str)


@pytest.mark.unit
class TestMemoryConfigKey:
    def test_literal_values(self) -> None:
        assert MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_MERGE == "hoodie.memory.merge.fraction"
        assert (
            MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_COMPACTION
            == "hoodie.memory.compaction.fraction"
        )
        assert MemoryConfigKey.MAX_MEMORY_FOR_MERGE == "hoodie.memory.merge.max.size"
        assert MemoryConfigKey.MAX_MEMORY_FOR_COMPACTION == "hoodie.memory.compaction.max.size"
        assert MemoryConfigKey.MAX_DFS_STREAM_BUFFER_SIZE == "hoodie.memory.dfs.buffer.max.size"
        assert MemoryConfigKey.SPILLABLE_MAP_BASE_PATH == "hoodie.memory.spillable.map.path"
        assert (
            MemoryConfigKey.WRITESTATUS_FAILURE_FRACTION
            == "hoodie.memory.writestatus.failure.fraction"
        )

    def test_seven_keys(self) -> None:
        assert len(list(MemoryConfigKey)) == 7

    def test_keys_unique(self) -> None:
        values = [key.value for key in MemoryConfigKey]
        assert len(set(values)) == len(values)

    def test_usable_as_dict_key(self) -> None:
        props = {"hoodie.memory.merge.fraction": "0.5"}
        assert props[MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_MERGE] == "0.5"

    def test_is_config_key(self) -> None:
        assert issubclass(MemoryConfigKey, ConfigKey)
