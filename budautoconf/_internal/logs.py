"""Log pipeline configuration.

Log exporters are split into two processing strategies:

- The exporter named ``logging`` receives every record immediately through
  a simple processor. It is meant for local, low-latency debug output.
- All remaining exporters are combined into one fan-out exporter behind a
  single batch processor.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog
from opentelemetry.metrics import MeterProvider
from opentelemetry.sdk._logs import LoggerProvider, LogRecordProcessor
from opentelemetry.sdk._logs.export import LogExporter
from opentelemetry.sdk.resources import Resource

from budautoconf._internal.config import ConfigProperties
from budautoconf._internal.constants import (
    BLRP_EXPORT_TIMEOUT,
    BLRP_MAX_EXPORT_BATCH_SIZE,
    BLRP_MAX_QUEUE_SIZE,
    BLRP_SCHEDULE_DELAY,
    LOGGING_EXPORTER,
)
from budautoconf._internal.discovery import PluginLoader
from budautoconf._internal.exporters import MultiLogExporter, configure_log_exporters
from budautoconf._internal.processors import MeteredBatchLogProcessor, SimpleLogProcessor

logger = structlog.get_logger(__name__)


def configure_log_processors(
    exporters_by_name: Mapping[str, LogExporter],
    meter_provider: MeterProvider,
    config: ConfigProperties | None = None,
) -> list[LogRecordProcessor]:
    """Select processors for the given log exporters.

    Args:
        exporters_by_name: Exporters keyed by configured name. Not modified.
        meter_provider: Meter provider for the batch processor's own metrics.
        config: Optional configuration carrying ``otel.blrp.*`` tuning.

    Returns:
        The immediate processor (if a ``logging`` exporter exists) followed
        by the batch processor (if any other exporter exists).
    """
    remaining = dict(exporters_by_name)
    processors: list[LogRecordProcessor] = []

    exporter = remaining.pop(LOGGING_EXPORTER, None)
    if exporter is not None:
        processors.append(SimpleLogProcessor(exporter))

    if remaining:
        batch_options = {}
        if config is not None:
            batch_options = {
                "schedule_delay_millis": config.get_duration_millis(BLRP_SCHEDULE_DELAY),
                "max_export_batch_size": config.get_int(BLRP_MAX_EXPORT_BATCH_SIZE),
                "export_timeout_millis": config.get_duration_millis(BLRP_EXPORT_TIMEOUT),
                "max_queue_size": config.get_int(BLRP_MAX_QUEUE_SIZE),
            }
        processors.append(
            MeteredBatchLogProcessor(
                MultiLogExporter(remaining.values()),
                meter_provider,
                **batch_options,
            )
        )

    return processors


def configure_logger_provider(
    resource: Resource,
    config: ConfigProperties,
    meter_provider: MeterProvider,
    loader: PluginLoader,
) -> LoggerProvider:
    """Build the SDK LoggerProvider for the configured log exporters."""
    logger_provider = LoggerProvider(resource=resource, shutdown_on_exit=False)

    exporters_by_name = configure_log_exporters(config, loader)
    for processor in configure_log_processors(exporters_by_name, meter_provider, config):
        logger_provider.add_log_record_processor(processor)

    logger.debug("logger_provider_configured", exporters=list(exporters_by_name))
    return logger_provider
