"""Plugin discovery for auto-configuration.

Plugins are discovered via Python entry points, enabling plugin-style
extensibility without modifying core code. Two capabilities are merged into
the customizer registry:

- ``budautoconf.tracer_provider_configurers``: legacy single-purpose hooks
  with ``configure(builder, config)``; they mutate the tracer provider
  builder in place.
- ``budautoconf.customizer_providers``: objects with ``customize(registry)``
  that may add any customizer to the registry.

Enumeration order is the order the loader yields entry points in. It is not
specified, but it is stable within one process.
"""

from __future__ import annotations

import importlib.metadata
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

import structlog

from budautoconf._internal.config import ConfigProperties
from budautoconf._internal.constants import (
    CUSTOMIZER_PROVIDERS_GROUP,
    TRACER_PROVIDER_CONFIGURERS_GROUP,
)
from budautoconf._internal.customizers import Customizer, CustomizerRegistry
from budautoconf._internal.exceptions import PluginLoadError

logger = structlog.get_logger(__name__)


@runtime_checkable
class CustomizerProvider(Protocol):
    """Protocol for plugins that customize auto-configuration."""

    def customize(self, registry: CustomizerRegistry) -> None: ...


@runtime_checkable
class TracerProviderConfigurer(Protocol):
    """Protocol for legacy plugins that configure the tracer provider builder in place."""

    def configure(self, builder: Any, config: ConfigProperties) -> None: ...


@runtime_checkable
class PluginLoader(Protocol):
    """Loads plugin instances for an entry point group."""

    def load(self, group: str) -> Iterable[Any]: ...


class EntryPointLoader:
    """Loads plugins from installed distributions' entry points.

    Entry points resolving to a class are instantiated with no arguments;
    anything else (a module-level instance or factory function) is returned
    as loaded.
    """

    def load(self, group: str) -> list[Any]:
        plugins = []
        for ep in importlib.metadata.entry_points(group=group):
            try:
                plugin = ep.load()
                if isinstance(plugin, type):
                    plugin = plugin()
            except Exception as e:
                raise PluginLoadError(group, ep.name, e) from e
            logger.debug("plugin_loaded", group=group, name=ep.name)
            plugins.append(plugin)
        return plugins


def _configurer_customizer(configurer: TracerProviderConfigurer) -> Customizer[Any]:
    def customize(builder: Any, config: ConfigProperties) -> Any:
        configurer.configure(builder, config)
        return builder

    return customize


class PluginDiscovery:
    """Discovers customization plugins and merges them into a registry.

    Example:
        >>> discovery = PluginDiscovery(EntryPointLoader())
        >>> discovery.merge_into(registry)
    """

    def __init__(self, loader: PluginLoader) -> None:
        self._loader = loader

    @property
    def loader(self) -> PluginLoader:
        return self._loader

    def discover(self, group: str) -> list[Any]:
        """Return every plugin instance registered for ``group``."""
        return list(self._loader.load(group))

    def merge_into(self, registry: CustomizerRegistry) -> None:
        """Apply all discovered plugins to ``registry``.

        Legacy tracer provider configurers are added first so they run
        before any customizer contributed by a customizer provider. Errors
        raised by a plugin propagate to the caller.
        """
        for configurer in self.discover(TRACER_PROVIDER_CONFIGURERS_GROUP):
            registry.add_tracer_provider_customizer(_configurer_customizer(configurer))
            logger.debug("tracer_provider_configurer_merged", plugin=type(configurer).__name__)

        for provider in self.discover(CUSTOMIZER_PROVIDERS_GROUP):
            provider.customize(registry)
            logger.debug("customizer_provider_applied", plugin=type(provider).__name__)
