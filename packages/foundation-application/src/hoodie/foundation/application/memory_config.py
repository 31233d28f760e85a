"""Memory configuration: a mutable builder and an immutable result.

``MemoryConfigBuilder`` accumulates string overrides from property files,
mappings and typed setters. ``build()`` applies ``MEMORY_DEFAULTS`` to any
key still unset and returns a ``MemoryConfig``, which is read-only and safe
to share between threads.

Values are stored as strings regardless of their logical type. Setters do
not validate ranges: a fraction of ``1.5`` is stored as ``"1.5"``. Parsing
happens in the typed accessors on read.

Example:
    >>> config = (
    ...     MemoryConfig.new_builder()
    ...     .with_max_memory_fraction_per_partition_merge(0.5)
    ...     .build()
    ... )
    >>> config["hoodie.memory.merge.fraction"]
    '0.5'
    >>> config["hoodie.memory.spillable.map.path"]
    '/tmp/'
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar

from hoodie.foundation.application.properties_file import load_properties
from hoodie.foundation.domain.config_defaults import MEMORY_DEFAULTS
from hoodie.foundation.domain.config_keys import MemoryConfigKey
from hoodie.foundation.domain.exceptions import (
    BuilderFinalizedError,
    ConfigKeyNotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    import os
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def apply_defaults(props: dict[str, str], defaults: Mapping[str, str]) -> list[str]:
    """Insert each default whose key is absent from ``props``.

    Args:
        props: Mutable property bag, updated in place.
        defaults: Default table keyed by config key string.

    Returns:
        Keys that received their default, in table order.
    """
    applied: list[str] = []
    for key, value in defaults.items():
        if key not in props:
            props[key] = value
            applied.append(key)
    return applied


class PropertiesConfig(Mapping[str, str]):
    """Immutable string-to-string configuration with typed lookups.

    Missing keys: ``config[key]`` raises ``ConfigKeyNotFoundError``;
    ``get()`` and the typed accessors return their ``default`` instead.
    A stored value that does not parse raises ``ValidationError``.

    Args:
        props: Finalized property bag. It is copied, so later changes to
            the argument are not visible through this object.
    """

    __slots__ = ("_props",)

    def __init__(self, props: Mapping[str, str]) -> None:
        self._props: Mapping[str, str] = MappingProxyType(dict(props))

    @property
    def props(self) -> Mapping[str, str]:
        """Read-only view of every resolved key and value."""
        return self._props

    def __getitem__(self, key: str) -> str:
        try:
            return self._props[key]
        except KeyError:
            raise ConfigKeyNotFoundError(str(key)) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({dict(self._props)!r})"

    def __contains__(self, key: object) -> bool:
        return key in self._props

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        return self._props.get(key, default)

    def _get_parsed(
        self,
        key: str,
        parser: Callable[[str], _T],
        type_name: str,
        default: _T | None,
    ) -> _T | None:
        raw = self._props.get(key)
        if raw is None:
            return default
        try:
            return parser(raw.strip())
        except ValueError:
            raise ValidationError(key, f"not {type_name}: {raw!r}", value=raw) from None

    def get_string(self, key: str, default: str | None = None) -> str | None:
        return self._props.get(key, default)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Read ``key`` as an integer (byte sizes, counts).

        Args:
            key: Configuration key string.
            default: Returned when the key is absent.

        Raises:
            ValidationError: If the stored value is not an integer literal.
        """
        return self._get_parsed(key, int, "an integer", default)

    def get_float(self, key: str, default: float | None = None) -> float | None:
        """Read ``key`` as a float (fractions).

        Raises:
            ValidationError: If the stored value is not a number.
        """
        return self._get_parsed(key, float, "a number", default)


class MemoryConfig(PropertiesConfig):
    """Resolved memory configuration.

    The typed properties parse on access and never inject a default: a key
    that was neither set nor defaulted at build time reads as ``None``.
    Notably the merge and compaction memory fractions have no build-time
    default.
    """

    __slots__ = ()

    @classmethod
    def new_builder(cls) -> MemoryConfigBuilder:
        return MemoryConfigBuilder()

    @property
    def max_memory_fraction_for_merge(self) -> float | None:
        return self.get_float(MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_MERGE.value)

    @property
    def max_memory_fraction_for_compaction(self) -> float | None:
        return self.get_float(MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_COMPACTION.value)

    @property
    def max_memory_for_merge(self) -> int | None:
        return self.get_int(MemoryConfigKey.MAX_MEMORY_FOR_MERGE.value)

    @property
    def max_memory_for_compaction(self) -> int | None:
        return self.get_int(MemoryConfigKey.MAX_MEMORY_FOR_COMPACTION.value)

    @property
    def max_dfs_stream_buffer_size(self) -> int | None:
        return self.get_int(MemoryConfigKey.MAX_DFS_STREAM_BUFFER_SIZE.value)

    @property
    def spillable_map_base_path(self) -> str | None:
        return self.get_string(MemoryConfigKey.SPILLABLE_MAP_BASE_PATH.value)

    @property
    def write_status_failure_fraction(self) -> float | None:
        return self.get_float(MemoryConfigKey.WRITESTATUS_FAILURE_FRACTION.value)


class MemoryConfigBuilder:
    """Accumulates overrides and finalizes them into a ``MemoryConfig``.

    Every mutator returns the builder for chaining. Sources are merged in
    call order, so the last writer of a key wins. ``build()`` may be called
    once; afterwards the builder is sealed and every call raises
    ``BuilderFinalizedError``.

    Not thread-safe: build on one thread, then share the result.
    """

    def __init__(self) -> None:
        self._props: dict[str, str] = {}
        self._built = False

    def _ensure_open(self, operation: str) -> None:
        if self._built:
            raise BuilderFinalizedError(operation)

    def _set(self, key: MemoryConfigKey, value: Any) -> None:
        self._props[key.value] = str(value)

    def from_file(self, path: str | os.PathLike[str]) -> MemoryConfigBuilder:
        """Merge entries from a property file.

        The file is parsed completely before anything is merged: if reading
        or parsing fails, the builder is left exactly as it was.

        Args:
            path: Property file to load.

        Raises:
            OSError: If the file cannot be opened or read.
            PropertiesFormatError: If the file content is malformed.
            BuilderFinalizedError: If ``build()`` was already called.
        """
        self._ensure_open("from_file")
        loaded = load_properties(path)
        self._props.update(loaded)
        logger.debug(
            "memory_config_file_loaded",
            extra={"path": str(path), "key_count": len(loaded)},
        )
        return self

    def from_properties(self, props: Mapping[Any, Any]) -> MemoryConfigBuilder:
        """Merge an external mapping; its values overwrite existing keys.

        Keys and values are stored in their string form.
        """
        self._ensure_open("from_properties")
        self._props.update({str(key): str(value) for key, value in props.items()})
        return self

    def with_max_memory_fraction_per_partition_merge(self, fraction: float) -> MemoryConfigBuilder:
        self._ensure_open("with_max_memory_fraction_per_partition_merge")
        self._set(MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_MERGE, fraction)
        return self

    def with_max_memory_max_size(
        self,
        merge_max_size: int,
        compaction_max_size: int,
    ) -> MemoryConfigBuilder:
        """Set the absolute byte ceilings for merge and compaction together."""
        self._ensure_open("with_max_memory_max_size")
        self._set(MemoryConfigKey.MAX_MEMORY_FOR_MERGE, merge_max_size)
        self._set(MemoryConfigKey.MAX_MEMORY_FOR_COMPACTION, compaction_max_size)
        return self

    def with_max_memory_fraction_per_compaction(self, fraction: float) -> MemoryConfigBuilder:
        self._ensure_open("with_max_memory_fraction_per_compaction")
        self._set(MemoryConfigKey.MAX_MEMORY_FRACTION_FOR_COMPACTION, fraction)
        return self

    def with_max_dfs_stream_buffer_size(self, size: int) -> MemoryConfigBuilder:
        self._ensure_open("with_max_dfs_stream_buffer_size")
        self._set(MemoryConfigKey.MAX_DFS_STREAM_BUFFER_SIZE, size)
        return self

    def with_spillable_map_base_path(self, path: str | os.PathLike[str]) -> MemoryConfigBuilder:
        self._ensure_open("with_spillable_map_base_path")
        self._set(MemoryConfigKey.SPILLABLE_MAP_BASE_PATH, path)
        return self

    def with_write_status_failure_fraction(self, fraction: float) -> MemoryConfigBuilder:
        self._ensure_open("with_write_status_failure_fraction")
        self._set(MemoryConfigKey.WRITESTATUS_FAILURE_FRACTION, fraction)
        return self

    def build(self) -> MemoryConfig:
        """Apply build-time defaults and return the immutable configuration.

        Only the keys in ``MEMORY_DEFAULTS`` are defaulted; any value already
        present is kept as-is. This is the only step that applies defaults.

        Raises:
            BuilderFinalizedError: If called more than once.
        """
        self._ensure_open("build")
        self._built = True

        props = dict(self._props)
        applied = apply_defaults(props, MEMORY_DEFAULTS)
        if applied:
            logger.debug(
                "memory_config_defaults_applied",
                extra={"defaulted_keys": applied},
            )

        config = MemoryConfig(props)
        logger.info(
            "memory_config_built",
            extra={"key_count": len(config), "defaulted_count": len(applied)},
        )
        return config
