"""Hoodie Foundation Application -- configuration assembly."""

from hoodie.foundation.application.memory_config import (
    MemoryConfig,
    MemoryConfigBuilder,
    PropertiesConfig,
    apply_defaults,
)
from hoodie.foundation.application.properties_file import (
    dump_properties,
    load_properties,
    parse_properties,
    write_properties,
)

__all__ = [
    "MemoryConfig",
    "MemoryConfigBuilder",
    "PropertiesConfig",
    "apply_defaults",
    "dump_properties",
    "load_properties",
    "parse_properties",
    "write_properties",
]
