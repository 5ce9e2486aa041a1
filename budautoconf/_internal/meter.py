"""Metric pipeline configuration.

The meter provider is the first provider built, because the trace and log
pipelines report their own processing metrics through it.
"""

from __future__ import annotations

import structlog
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

from budautoconf._internal.config import ConfigProperties
from budautoconf._internal.constants import (
    DEFAULT_METRIC_EXPORT_INTERVAL_MILLIS,
    METRIC_EXPORT_INTERVAL,
)
from budautoconf._internal.discovery import PluginLoader
from budautoconf._internal.exporters import configure_metric_exporters

logger = structlog.get_logger(__name__)


def configure_meter_provider(
    resource: Resource,
    config: ConfigProperties,
    loader: PluginLoader,
) -> MeterProvider:
    """Build the SDK MeterProvider with one periodic reader per configured exporter.

    Args:
        resource: The customized resource shared by all providers.
        config: Configuration snapshot.
        loader: Loader used to discover metric exporter plugins.

    Returns:
        A MeterProvider whose shutdown is owned by the caller.
    """
    interval = config.get_duration_millis(METRIC_EXPORT_INTERVAL, DEFAULT_METRIC_EXPORT_INTERVAL_MILLIS)
    exporters = configure_metric_exporters(config, loader)
    readers = [
        PeriodicExportingMetricReader(exporter, export_interval_millis=interval) for exporter in exporters.values()
    ]

    logger.debug("meter_provider_configured", exporters=list(exporters), export_interval_millis=interval)
    return MeterProvider(resource=resource, metric_readers=readers, shutdown_on_exit=False)
