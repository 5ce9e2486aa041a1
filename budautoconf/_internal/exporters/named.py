"""Exporter selection by configured name.

Each signal has a small set of built-in exporters (``otlp``, ``logging``)
plus the special name ``none``. Any other name is looked up among the
exporter provider plugins registered for the signal's entry point group.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

import structlog
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk._logs.export import ConsoleLogExporter
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from budautoconf._internal.config import ConfigProperties
from budautoconf._internal.constants import (
    DEFAULT_LOGS_EXPORTER,
    DEFAULT_METRICS_EXPORTER,
    DEFAULT_TRACES_EXPORTER,
    LOG_EXPORTERS_GROUP,
    LOGGING_EXPORTER,
    LOGS_EXPORTER,
    METRIC_EXPORTERS_GROUP,
    METRICS_EXPORTER,
    NONE_EXPORTER,
    OTLP_EXPORTER,
    SPAN_EXPORTERS_GROUP,
    TRACES_EXPORTER,
)
from budautoconf._internal.discovery import PluginLoader
from budautoconf._internal.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

ExporterFactory = Callable[[ConfigProperties], Any]


@runtime_checkable
class ExporterProvider(Protocol):
    """Protocol for plugins contributing an exporter under a configurable name."""

    name: str

    def create_exporter(self, config: ConfigProperties) -> Any: ...


def _otlp_options(config: ConfigProperties, signal: str) -> dict[str, Any]:
    """Collect OTLP exporter options, signal-specific keys winning over generic ones."""
    options: dict[str, Any] = {}

    endpoint = config.get_string(f"otel.exporter.otlp.{signal}.endpoint")
    if endpoint is None:
        base = config.get_string("otel.exporter.otlp.endpoint")
        if base is not None:
            endpoint = f"{base.rstrip('/')}/v1/{signal}"
    if endpoint is not None:
        options["endpoint"] = endpoint

    headers = config.get_map("otel.exporter.otlp.headers")
    headers.update(config.get_map(f"otel.exporter.otlp.{signal}.headers"))
    if headers:
        options["headers"] = headers

    timeout_millis = config.get_duration_millis(
        f"otel.exporter.otlp.{signal}.timeout",
        config.get_duration_millis("otel.exporter.otlp.timeout"),
    )
    if timeout_millis is not None:
        options["timeout"] = timeout_millis / 1000
    return options


SPAN_EXPORTERS: Mapping[str, ExporterFactory] = {
    OTLP_EXPORTER: lambda config: OTLPSpanExporter(**_otlp_options(config, "traces")),
    LOGGING_EXPORTER: lambda config: ConsoleSpanExporter(),
}

METRIC_EXPORTERS: Mapping[str, ExporterFactory] = {
    OTLP_EXPORTER: lambda config: OTLPMetricExporter(**_otlp_options(config, "metrics")),
    LOGGING_EXPORTER: lambda config: ConsoleMetricExporter(),
}

LOG_EXPORTERS: Mapping[str, ExporterFactory] = {
    OTLP_EXPORTER: lambda config: OTLPLogExporter(**_otlp_options(config, "logs")),
    LOGGING_EXPORTER: lambda config: ConsoleLogExporter(),
}


def configure_exporters(
    config: ConfigProperties,
    key: str,
    default: str,
    builtins: Mapping[str, ExporterFactory],
    group: str,
    loader: PluginLoader,
) -> dict[str, Any]:
    """Create the exporters named by the ``key`` property.

    Args:
        config: Configuration snapshot.
        key: Property listing exporter names.
        default: Exporter name used when the property is absent.
        builtins: Built-in factories keyed by exporter name.
        group: Entry point group holding exporter provider plugins.
        loader: Loader used to discover exporter provider plugins.

    Returns:
        Exporters keyed by name, in configured order. Empty for ``none``.

    Raises:
        ConfigurationError: If ``none`` is combined with other names or a
            name matches neither a built-in nor a plugin.
    """
    names = list(dict.fromkeys(config.get_list(key, [default])))
    if NONE_EXPORTER in names:
        if len(names) > 1:
            raise ConfigurationError(f"{key} contains {NONE_EXPORTER} along with other exporters", key=key)
        return {}

    providers: dict[str, ExporterProvider] | None = None
    exporters: dict[str, Any] = {}
    for name in names:
        factory = builtins.get(name)
        if factory is None:
            if providers is None:
                providers = {provider.name: provider for provider in loader.load(group)}
            provider = providers.get(name)
            if provider is None:
                raise ConfigurationError(f"Unrecognized value for {key}: {name}", key=key)
            factory = provider.create_exporter
        exporters[name] = factory(config)
        logger.debug("exporter_configured", key=key, exporter=name)
    return exporters


def configure_span_exporters(config: ConfigProperties, loader: PluginLoader) -> dict[str, Any]:
    return configure_exporters(
        config, TRACES_EXPORTER, DEFAULT_TRACES_EXPORTER, SPAN_EXPORTERS, SPAN_EXPORTERS_GROUP, loader
    )


def configure_metric_exporters(config: ConfigProperties, loader: PluginLoader) -> dict[str, Any]:
    return configure_exporters(
        config, METRICS_EXPORTER, DEFAULT_METRICS_EXPORTER, METRIC_EXPORTERS, METRIC_EXPORTERS_GROUP, loader
    )


def configure_log_exporters(config: ConfigProperties, loader: PluginLoader) -> dict[str, Any]:
    return configure_exporters(config, LOGS_EXPORTER, DEFAULT_LOGS_EXPORTER, LOG_EXPORTERS, LOG_EXPORTERS_GROUP, loader)
