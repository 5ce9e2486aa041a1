"""Customizer chains for auto-configured components.

A customizer is a function ``(value, config) -> value`` that may replace or
adjust an intermediate artifact (the tracer provider builder, a span
exporter, the resource, ...) while the SDK is being assembled.

Customizers registered for the same kind form a chain. Resolving the chain
yields one function that applies them in registration order, each one
receiving the output of the previous one::

    registry.add_resource_customizer(f1)
    registry.add_resource_customizer(f2)
    registry.resolve(CustomizerKind.RESOURCE)(r, cfg) == f2(f1(r, cfg), cfg)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from budautoconf._internal.config import ConfigProperties, PropertiesSupplier

T = TypeVar("T")

Customizer = Callable[[T, ConfigProperties], T]


class CustomizerKind(str, Enum):
    """Artifacts that can be customized during assembly."""

    TRACER_PROVIDER = "tracer_provider"
    PROPAGATOR = "propagator"
    SPAN_EXPORTER = "span_exporter"
    RESOURCE = "resource"
    SAMPLER = "sampler"


def _identity(value: Any, config: ConfigProperties) -> Any:
    return value


class CustomizerChain(Generic[T]):
    """Ordered, append-only sequence of customizers for one artifact kind."""

    def __init__(self) -> None:
        self._customizers: list[Customizer[T]] = []

    def __len__(self) -> int:
        return len(self._customizers)

    def append(self, customizer: Customizer[T]) -> None:
        """Append a customizer to the end of the chain.

        Args:
            customizer: Function taking the current value and config.

        Raises:
            TypeError: If customizer is not callable.
        """
        if not callable(customizer):
            raise TypeError(f"customizer must be callable, got {type(customizer).__name__}")
        self._customizers.append(customizer)

    def resolve(self) -> Customizer[T]:
        """Fold the chain into a single function.

        The chain is snapshotted, so customizers appended afterwards do not
        affect the returned function.
        """
        customizers = tuple(self._customizers)
        if not customizers:
            return _identity

        def apply(value: T, config: ConfigProperties) -> T:
            for customizer in customizers:
                value = customizer(value, config)
            return value

        return apply


class CustomizerRegistry:
    """Holds one customizer chain per kind plus the property suppliers.

    This is the object handed to customizer provider plugins. All ``add_*``
    methods return the registry so calls can be chained.
    """

    def __init__(self) -> None:
        self._chains: dict[CustomizerKind, CustomizerChain[Any]] = {kind: CustomizerChain() for kind in CustomizerKind}
        self._properties_suppliers: list[PropertiesSupplier] = []

    def add(self, kind: CustomizerKind | str, customizer: Customizer[Any]) -> CustomizerRegistry:
        """Append a customizer to the chain for ``kind``.

        Args:
            kind: The artifact kind, as enum member or its string value.
            customizer: Function ``(value, config) -> value``.

        Returns:
            This registry for chaining.
        """
        self._chains[CustomizerKind(kind)].append(customizer)
        return self

    def resolve(self, kind: CustomizerKind | str) -> Customizer[Any]:
        """Return the composition of every customizer added for ``kind``."""
        return self._chains[CustomizerKind(kind)].resolve()

    def count(self, kind: CustomizerKind | str) -> int:
        """Number of customizers registered for ``kind``."""
        return len(self._chains[CustomizerKind(kind)])

    def add_tracer_provider_customizer(self, customizer: Customizer[Any]) -> CustomizerRegistry:
        """Customize the ``TracerProviderBuilder`` before the provider is built."""
        return self.add(CustomizerKind.TRACER_PROVIDER, customizer)

    def add_propagator_customizer(self, customizer: Customizer[Any]) -> CustomizerRegistry:
        """Customize each configured text-map propagator."""
        return self.add(CustomizerKind.PROPAGATOR, customizer)

    def add_span_exporter_customizer(self, customizer: Customizer[Any]) -> CustomizerRegistry:
        """Customize each configured span exporter."""
        return self.add(CustomizerKind.SPAN_EXPORTER, customizer)

    def add_resource_customizer(self, customizer: Customizer[Any]) -> CustomizerRegistry:
        """Customize the resource shared by every provider."""
        return self.add(CustomizerKind.RESOURCE, customizer)

    def add_sampler_customizer(self, customizer: Customizer[Any]) -> CustomizerRegistry:
        """Customize the configured sampler."""
        return self.add(CustomizerKind.SAMPLER, customizer)

    def add_properties_supplier(self, supplier: Callable[[], Mapping[str, str]]) -> CustomizerRegistry:
        """Add a supplier of default properties.

        Suppliers are merged in order, later ones overwriting duplicate keys.
        Environment variables and process properties still take precedence.
        """
        if not callable(supplier):
            raise TypeError(f"supplier must be callable, got {type(supplier).__name__}")
        self._properties_suppliers.append(supplier)
        return self

    @property
    def properties_suppliers(self) -> tuple[PropertiesSupplier, ...]:
        return tuple(self._properties_suppliers)
