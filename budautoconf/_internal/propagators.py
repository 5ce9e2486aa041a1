"""Context propagator configuration.

``tracecontext`` and ``baggage`` are built in. Other names are resolved
among the propagator provider plugins of the ``budautoconf.propagators``
group, loaded through the builder's plugin loader.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from budautoconf._internal.config import ConfigProperties
from budautoconf._internal.constants import (
    DEFAULT_PROPAGATORS,
    NONE_EXPORTER,
    PROPAGATORS,
    PROPAGATORS_GROUP,
)
from budautoconf._internal.customizers import Customizer
from budautoconf._internal.discovery import PluginLoader
from budautoconf._internal.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


@runtime_checkable
class PropagatorProvider(Protocol):
    """Protocol for plugins contributing a propagator under a configurable name."""

    name: str

    def create_propagator(self, config: ConfigProperties) -> TextMapPropagator: ...


BUILTIN_PROPAGATORS = {
    "tracecontext": TraceContextTextMapPropagator,
    "baggage": W3CBaggagePropagator,
}


def configure_propagators(
    config: ConfigProperties,
    customizer: Customizer[TextMapPropagator],
    loader: PluginLoader,
) -> CompositePropagator:
    """Build the composite propagator named by ``otel.propagators``.

    Each configured propagator is passed through ``customizer``. ``none``
    yields an empty composite.

    Raises:
        ConfigurationError: If ``none`` is combined with other names or a
            name matches neither a built-in nor a plugin.
    """
    names = list(dict.fromkeys(config.get_list(PROPAGATORS, DEFAULT_PROPAGATORS)))
    if NONE_EXPORTER in names:
        if len(names) > 1:
            raise ConfigurationError(
                f"{PROPAGATORS} contains {NONE_EXPORTER} along with other propagators", key=PROPAGATORS
            )
        names = []

    providers: dict[str, PropagatorProvider] | None = None
    propagators: list[TextMapPropagator] = []
    for name in names:
        builtin = BUILTIN_PROPAGATORS.get(name)
        if builtin is not None:
            propagator = builtin()
        else:
            if providers is None:
                providers = {provider.name: provider for provider in loader.load(PROPAGATORS_GROUP)}
            provider = providers.get(name)
            if provider is None:
                raise ConfigurationError(f"Unrecognized value for {PROPAGATORS}: {name}", key=PROPAGATORS)
            propagator = provider.create_propagator(config)
        propagators.append(customizer(propagator, config))

    logger.debug("propagators_configured", propagators=names)
    return CompositePropagator(propagators)
