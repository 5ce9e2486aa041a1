"""Test utilities for budautoconf.

This module provides a plugin loader serving fixed plugin instances, so
tests can exercise plugin discovery without installing entry points.

Example:
    >>> from budautoconf.testing import StaticPluginLoader
    >>> loader = StaticPluginLoader({"budautoconf.customizer_providers": [MyPlugin()]})
    >>> bundle = AutoConfiguredSdkBuilder().set_plugin_loader(loader).build()
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


class StaticPluginLoader:
    """Plugin loader returning preconfigured plugins per entry point group.

    Records how many times each group was loaded in ``load_counts``.
    """

    def __init__(self, plugins: Mapping[str, Iterable[Any]] | None = None) -> None:
        self._plugins = {group: list(items) for group, items in (plugins or {}).items()}
        self.load_counts: dict[str, int] = {}

    def add(self, group: str, plugin: Any) -> StaticPluginLoader:
        self._plugins.setdefault(group, []).append(plugin)
        return self

    def load(self, group: str) -> list[Any]:
        self.load_counts[group] = self.load_counts.get(group, 0) + 1
        return list(self._plugins.get(group, []))


__all__ = ["StaticPluginLoader"]
