"""Hoodie Infra Config -- environment overrides and startup loading."""

from __future__ import annotations

from hoodie.infra.config.loader import load_memory_config
from hoodie.infra.config.settings import MemoryConfigSettings, get_memory_config_settings

__all__ = [
    "MemoryConfigSettings",
    "get_memory_config_settings",
    "load_memory_config",
]
