"""Public type definitions for budautoconf.

This module contains the types plugin authors use for type hints.
Types are intentionally kept separate from implementation to provide a clean
public API surface.

Example:
    >>> from budautoconf.types import Customizer, CustomizerProvider
    >>> class MyPlugin:
    ...     def customize(self, registry) -> None:
    ...         registry.add_resource_customizer(lambda resource, config: resource)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from budautoconf._internal.customizers import Customizer
from budautoconf._internal.discovery import CustomizerProvider, TracerProviderConfigurer
from budautoconf._internal.exporters import ExporterProvider
from budautoconf._internal.propagators import PropagatorProvider

# Supplier of default configuration properties
PropertiesSupplier = Callable[[], Mapping[str, str]]

__all__ = [
    "Customizer",
    "CustomizerProvider",
    "ExporterProvider",
    "PropagatorProvider",
    "PropertiesSupplier",
    "TracerProviderConfigurer",
]
