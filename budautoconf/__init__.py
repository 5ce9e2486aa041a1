"""budautoconf - OpenTelemetry SDK auto-configuration for Bud-Stack services.

Assembles tracer, meter and logger providers from configuration properties
and installed plugins, and returns them as one ProviderBundle with a bounded
shutdown path.

Example:
    >>> import budautoconf
    >>> bundle = budautoconf.initialize()
    >>> tracer = bundle.tracer_provider.get_tracer(__name__)

Configuration:
    Properties are resolved in this order:
    1. Process properties set with AutoConfiguredSdkBuilder.set_process_properties()
    2. Environment variables (OTEL_*)
    3. Property suppliers, later suppliers winning

    Common properties:
        OTEL_SERVICE_NAME: Service name
        OTEL_RESOURCE_ATTRIBUTES: Extra resource attributes (k=v,k2=v2)
        OTEL_TRACES_EXPORTER / OTEL_METRICS_EXPORTER / OTEL_LOGS_EXPORTER: otlp, logging, none
        OTEL_TRACES_SAMPLER / OTEL_TRACES_SAMPLER_ARG: Sampler and its ratio
        OTEL_PROPAGATORS: tracecontext, baggage, none
"""

from budautoconf._internal.config import ConfigProperties
from budautoconf._internal.customizers import CustomizerKind, CustomizerRegistry
from budautoconf._internal.discovery import EntryPointLoader, PluginDiscovery, PluginLoader
from budautoconf._internal.exceptions import AutoConfigurationError, ConfigurationError, PluginLoadError
from budautoconf._internal.logs import configure_log_processors
from budautoconf._internal.main import get_default_bundle, initialize, install_as_default
from budautoconf._internal.sdk import AutoConfiguredSdkBuilder, ProviderBundle, builder
from budautoconf._internal.shutdown import ShutdownCoordinator, register_shutdown
from budautoconf._internal.tracer import TracerProviderBuilder
from budautoconf._internal.version import __version__

__all__ = [
    "AutoConfigurationError",
    "AutoConfiguredSdkBuilder",
    "ConfigProperties",
    "ConfigurationError",
    "CustomizerKind",
    "CustomizerRegistry",
    "EntryPointLoader",
    "PluginDiscovery",
    "PluginLoadError",
    "PluginLoader",
    "ProviderBundle",
    "ShutdownCoordinator",
    "TracerProviderBuilder",
    "__version__",
    "builder",
    "configure_log_processors",
    "get_default_bundle",
    "initialize",
    "install_as_default",
    "register_shutdown",
]
