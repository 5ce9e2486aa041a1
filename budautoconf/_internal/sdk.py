"""Auto-configured SDK builder - assembles providers from config and plugins.

This module contains AutoConfiguredSdkBuilder, which resolves configuration
properties, applies discovered plugins and registered customizers, and
builds every provider in dependency order:

    resource -> meter provider -> tracer provider -> logger provider -> propagators

The meter provider is built before the tracer and logger providers because
both report their own processing metrics through it. Every provider shares
the same customized resource instance.

Example:
    >>> from budautoconf import AutoConfiguredSdkBuilder
    >>> bundle = (
    ...     AutoConfiguredSdkBuilder()
    ...     .add_properties_supplier(lambda: {"otel.service.name": "my-service"})
    ...     .add_resource_customizer(lambda resource, config: resource)
    ...     .build()
    ... )
    >>> tracer = bundle.tracer_provider.get_tracer(__name__)
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

from budautoconf._internal.config import ConfigProperties, merge_properties
from budautoconf._internal.customizers import Customizer, CustomizerKind, CustomizerRegistry
from budautoconf._internal.discovery import EntryPointLoader, PluginDiscovery, PluginLoader
from budautoconf._internal.logs import configure_logger_provider
from budautoconf._internal.meter import configure_meter_provider
from budautoconf._internal.propagators import configure_propagators
from budautoconf._internal.resource import configure_resource
from budautoconf._internal.shutdown import ShutdownCoordinator, register_shutdown
from budautoconf._internal.tracer import TracerProviderBuilder, configure_tracer_provider

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProviderBundle:
    """The providers, resource and propagator produced by one assembly.

    Attributes:
        resource: The customized resource used by every provider.
        meter_provider: SDK MeterProvider.
        tracer_provider: SDK TracerProvider.
        logger_provider: SDK LoggerProvider.
        propagator: Composite of the configured text-map propagators.
        config: The configuration snapshot used for the assembly.
    """

    resource: Resource
    meter_provider: MeterProvider
    tracer_provider: TracerProvider
    logger_provider: LoggerProvider
    propagator: TextMapPropagator
    config: ConfigProperties = field(repr=False)
    coordinator: ShutdownCoordinator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinator", ShutdownCoordinator(self.providers))

    @property
    def providers(self) -> dict[str, Any]:
        """Providers keyed by signal, in shutdown order."""
        return {
            "tracer_provider": self.tracer_provider,
            "meter_provider": self.meter_provider,
            "logger_provider": self.logger_provider,
        }

    def shutdown(self) -> bool:
        """Shut down all providers concurrently, waiting at most the shutdown deadline.

        Returns:
            True if every provider shut down cleanly in time.
        """
        return self.coordinator.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Force flush all pending telemetry.

        Args:
            timeout_millis: Maximum time to wait for each provider's flush.

        Returns:
            True if every flush succeeded, False otherwise.
        """
        success = True
        for provider in self.providers.values():
            success = provider.force_flush(timeout_millis) and success
        return success


class AutoConfiguredSdkBuilder:
    """Builder for auto-configuring the OTEL SDK.

    Customizers registered through the ``add_*`` methods (or by plugins)
    run in registration order; each receives the previous one's output.
    Plugins are discovered and merged once per builder, on the first
    ``build()``.
    """

    def __init__(self) -> None:
        self._config: ConfigProperties | None = None
        self._customizers = CustomizerRegistry()
        self._loader: PluginLoader = EntryPointLoader()
        self._process_properties: dict[str, str] = {}
        self._register_shutdown_hook = False
        self._set_result_as_global = False
        self._customized = False
        self._customized_lock = threading.Lock()

    @property
    def customizers(self) -> CustomizerRegistry:
        return self._customizers

    def set_config(self, config: ConfigProperties) -> AutoConfiguredSdkBuilder:
        """Use ``config`` as-is; property suppliers are then ignored."""
        if config is None:
            raise TypeError("config must not be None")
        self._config = config
        return self

    def set_process_properties(self, properties: Mapping[str, str]) -> AutoConfiguredSdkBuilder:
        """Set properties that take precedence over environment variables and suppliers."""
        self._process_properties = dict(properties)
        return self

    def set_plugin_loader(self, loader: PluginLoader) -> AutoConfiguredSdkBuilder:
        """Set the loader used to discover plugins. Defaults to entry points."""
        if loader is None:
            raise TypeError("loader must not be None")
        self._loader = loader
        return self

    def register_shutdown_hook(self, register: bool) -> AutoConfiguredSdkBuilder:
        """Register an exit handler shutting down the built providers. Off by default."""
        self._register_shutdown_hook = register
        return self

    def set_result_as_global(self, set_global: bool) -> AutoConfiguredSdkBuilder:
        """Install the built bundle as the process-wide OTEL default. Off by default."""
        self._set_result_as_global = set_global
        return self

    def add_tracer_provider_customizer(self, customizer: Customizer[TracerProviderBuilder]) -> AutoConfiguredSdkBuilder:
        self._customizers.add_tracer_provider_customizer(customizer)
        return self

    def add_propagator_customizer(self, customizer: Customizer[TextMapPropagator]) -> AutoConfiguredSdkBuilder:
        self._customizers.add_propagator_customizer(customizer)
        return self

    def add_span_exporter_customizer(self, customizer: Customizer[Any]) -> AutoConfiguredSdkBuilder:
        self._customizers.add_span_exporter_customizer(customizer)
        return self

    def add_resource_customizer(self, customizer: Customizer[Resource]) -> AutoConfiguredSdkBuilder:
        self._customizers.add_resource_customizer(customizer)
        return self

    def add_sampler_customizer(self, customizer: Customizer[Any]) -> AutoConfiguredSdkBuilder:
        self._customizers.add_sampler_customizer(customizer)
        return self

    def add_properties_supplier(self, supplier: Callable[[], Mapping[str, str]]) -> AutoConfiguredSdkBuilder:
        """Add default properties; later suppliers overwrite earlier ones on duplicate keys.

        Environment variables and process properties take precedence over
        every supplier.
        """
        self._customizers.add_properties_supplier(supplier)
        return self

    def _merge_plugins(self) -> None:
        with self._customized_lock:
            if self._customized:
                return
            self._customized = True
        PluginDiscovery(self._loader).merge_into(self._customizers)

    def _get_config(self) -> ConfigProperties:
        if self._config is not None:
            return self._config
        return ConfigProperties.create(
            merge_properties(self._customizers.properties_suppliers),
            process_properties=self._process_properties,
        )

    def build(self) -> ProviderBundle:
        """Assemble all providers.

        Any exception raised by configuration, a plugin or a customizer
        aborts the assembly and propagates. Providers already built at that
        point are not shut down.

        Returns:
            A new ProviderBundle.
        """
        self._merge_plugins()

        config = self._get_config()
        customizers = self._customizers

        resource = configure_resource(config, customizers.resolve(CustomizerKind.RESOURCE))

        meter_provider = configure_meter_provider(resource, config, self._loader)

        tracer_provider_builder = TracerProviderBuilder().set_resource(resource)
        configure_tracer_provider(
            tracer_provider_builder,
            config,
            self._loader,
            meter_provider,
            customizers.resolve(CustomizerKind.SPAN_EXPORTER),
            customizers.resolve(CustomizerKind.SAMPLER),
        )
        tracer_provider_builder = customizers.resolve(CustomizerKind.TRACER_PROVIDER)(tracer_provider_builder, config)
        tracer_provider = tracer_provider_builder.build()

        logger_provider = configure_logger_provider(resource, config, meter_provider, self._loader)

        propagator = configure_propagators(config, customizers.resolve(CustomizerKind.PROPAGATOR), self._loader)

        bundle = ProviderBundle(
            resource=resource,
            meter_provider=meter_provider,
            tracer_provider=tracer_provider,
            logger_provider=logger_provider,
            propagator=propagator,
            config=config,
        )

        if self._register_shutdown_hook:
            register_shutdown(bundle)

        if self._set_result_as_global:
            # Import here to avoid circular dependency
            from budautoconf._internal.main import install_as_default

            install_as_default(bundle)

        logger.info("sdk_autoconfigured", service_name=resource.attributes.get("service.name"))
        return bundle


def builder() -> AutoConfiguredSdkBuilder:
    """Return a new AutoConfiguredSdkBuilder."""
    return AutoConfiguredSdkBuilder()
