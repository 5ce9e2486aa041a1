"""Configuration properties for auto-configuration.

This module turns property sources into a single immutable snapshot that
every configuration step and customizer reads from.

Sources follow a fixed priority order:
1. Process properties passed explicitly to ``ConfigProperties.create`` (highest)
2. Environment variables (``OTEL_TRACES_EXPORTER`` etc.)
3. Supplied property maps, merged in order so later maps win (lowest)

Keys are normalised before lookup: lower case, with ``_`` and ``-`` turned
into ``.``. ``OTEL_SERVICE_NAME`` and ``otel.service.name`` are the same key.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from budautoconf._internal.exceptions import ConfigurationError

PropertiesSupplier = Callable[[], Mapping[str, str]]

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*(ms|s|m|h|d)?\s*$")
_DURATION_UNITS_MILLIS = {
    None: 1,
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
}


def normalize_key(key: str) -> str:
    """Normalise a property key or environment variable name.

    Args:
        key: Property key in any supported spelling.

    Returns:
        The dotted lower-case form of the key.
    """
    return key.strip().lower().replace("_", ".").replace("-", ".")


def merge_properties(suppliers: Iterable[PropertiesSupplier]) -> dict[str, str]:
    """Merge property suppliers in order, later suppliers overwriting earlier keys.

    Args:
        suppliers: Callables returning property mappings.

    Returns:
        A new dict with normalised keys.
    """
    merged: dict[str, str] = {}
    for supplier in suppliers:
        for key, value in supplier().items():
            merged[normalize_key(key)] = value
    return merged


class ConfigProperties:
    """Immutable, read-only view over merged configuration properties.

    Typed getters return ``None`` (or the given default) when a key is absent
    or blank, and raise ``ConfigurationError`` when a value cannot be parsed.
    """

    def __init__(self, properties: Mapping[str, str]) -> None:
        normalized = {normalize_key(key): value for key, value in properties.items()}
        self._properties: Mapping[str, str] = MappingProxyType(normalized)

    @classmethod
    def create(
        cls,
        supplied: Mapping[str, str] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        process_properties: Mapping[str, str] | None = None,
    ) -> ConfigProperties:
        """Create a snapshot from all property sources.

        Args:
            supplied: Merged supplier properties (lowest priority).
            environ: Environment mapping. Defaults to ``os.environ``.
            process_properties: Explicit process-level overrides (highest priority).

        Returns:
            A new ConfigProperties snapshot.
        """
        merged: dict[str, str] = {}
        for source in (supplied or {}, os.environ if environ is None else environ, process_properties or {}):
            for key, value in source.items():
                merged[normalize_key(key)] = value
        return cls(merged)

    def as_dict(self) -> dict[str, str]:
        """Return a copy of every property in the snapshot."""
        return dict(self._properties)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._properties

    def __repr__(self) -> str:
        return f"ConfigProperties({len(self._properties)} properties)"

    def get_string(self, key: str, default: str | None = None) -> str | None:
        value = self._properties.get(normalize_key(key))
        if value is None or not value.strip():
            return default
        return value.strip()

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean; ``true`` (any case) is True, every other value is False."""
        value = self.get_string(key)
        if value is None:
            return default
        return value.lower() == "true"

    def get_int(self, key: str, default: int | None = None) -> int | None:
        value = self.get_string(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(
                f"Invalid value for property {key}={value}. Must be an integer.", key=key
            ) from None

    def get_float(self, key: str, default: float | None = None) -> float | None:
        value = self.get_string(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(f"Invalid value for property {key}={value}. Must be a number.", key=key) from None

    def get_duration_millis(self, key: str, default: int | None = None) -> int | None:
        """Get a duration in milliseconds.

        Accepts a bare integer (milliseconds) or an integer with one of the
        units ``ms``, ``s``, ``m``, ``h`` or ``d``.
        """
        value = self.get_string(key)
        if value is None:
            return default
        match = _DURATION_PATTERN.match(value.lower())
        if match is None:
            raise ConfigurationError(f"Invalid duration property {key}={value}.", key=key)
        amount, unit = match.groups()
        return int(amount) * _DURATION_UNITS_MILLIS[unit]

    def get_list(self, key: str, default: Iterable[str] | None = None) -> list[str]:
        """Get a comma separated list; blank entries are dropped."""
        value = self.get_string(key)
        if value is None:
            return list(default or [])
        return [item.strip() for item in value.split(",") if item.strip()]

    def get_map(self, key: str) -> dict[str, str]:
        """Get a comma separated list of ``key=value`` pairs."""
        result: dict[str, str] = {}
        for entry in self.get_list(key):
            name, sep, value = entry.partition("=")
            if not sep or not name.strip():
                raise ConfigurationError(
                    f"Invalid map property: {key}={self.get_string(key)}",
                    key=key,
                )
            result[name.strip()] = value.strip()
        return result
