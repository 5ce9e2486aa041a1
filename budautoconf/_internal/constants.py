"""Property keys, defaults and reserved names for budautoconf.

Keys are written in their normalised dotted form. The matching environment
variable is the upper-cased key with dots replaced by underscores, e.g.
``otel.traces.exporter`` <-> ``OTEL_TRACES_EXPORTER``.

Centralized constants ensure consistency and prevent typos.
"""

from __future__ import annotations

# Resource
SERVICE_NAME = "otel.service.name"
RESOURCE_ATTRIBUTES = "otel.resource.attributes"

# Exporter selection
TRACES_EXPORTER = "otel.traces.exporter"
METRICS_EXPORTER = "otel.metrics.exporter"
LOGS_EXPORTER = "otel.logs.exporter"

# Sampling
TRACES_SAMPLER = "otel.traces.sampler"
TRACES_SAMPLER_ARG = "otel.traces.sampler.arg"

# Propagation
PROPAGATORS = "otel.propagators"

# Metric reader
METRIC_EXPORT_INTERVAL = "otel.metric.export.interval"

# Batch span processor
BSP_SCHEDULE_DELAY = "otel.bsp.schedule.delay"
BSP_MAX_QUEUE_SIZE = "otel.bsp.max.queue.size"
BSP_MAX_EXPORT_BATCH_SIZE = "otel.bsp.max.export.batch.size"
BSP_EXPORT_TIMEOUT = "otel.bsp.export.timeout"

# Batch log record processor
BLRP_SCHEDULE_DELAY = "otel.blrp.schedule.delay"
BLRP_MAX_QUEUE_SIZE = "otel.blrp.max.queue.size"
BLRP_MAX_EXPORT_BATCH_SIZE = "otel.blrp.max.export.batch.size"
BLRP_EXPORT_TIMEOUT = "otel.blrp.export.timeout"

# Defaults
DEFAULT_TRACES_EXPORTER = "otlp"
DEFAULT_METRICS_EXPORTER = "otlp"
DEFAULT_LOGS_EXPORTER = "none"
DEFAULT_SAMPLER = "parentbased_always_on"
DEFAULT_SERVICE_NAME = "unknown_service"
DEFAULT_PROPAGATORS = ("tracecontext", "baggage")
DEFAULT_METRIC_EXPORT_INTERVAL_MILLIS = 60000

# Reserved exporter names
LOGGING_EXPORTER = "logging"
OTLP_EXPORTER = "otlp"
NONE_EXPORTER = "none"

# Entry point groups
CUSTOMIZER_PROVIDERS_GROUP = "budautoconf.customizer_providers"
TRACER_PROVIDER_CONFIGURERS_GROUP = "budautoconf.tracer_provider_configurers"
SPAN_EXPORTERS_GROUP = "budautoconf.span_exporters"
METRIC_EXPORTERS_GROUP = "budautoconf.metric_exporters"
LOG_EXPORTERS_GROUP = "budautoconf.log_exporters"
PROPAGATORS_GROUP = "budautoconf.propagators"

# Seconds the shutdown coordinator waits for providers before giving up
SHUTDOWN_TIMEOUT_SECONDS = 10.0

# Instrumentation scope used for self-monitoring metrics
INSTRUMENTATION_SCOPE = "budautoconf"

__all__ = [
    "BLRP_EXPORT_TIMEOUT",
    "BLRP_MAX_EXPORT_BATCH_SIZE",
    "BLRP_MAX_QUEUE_SIZE",
    "BLRP_SCHEDULE_DELAY",
    "BSP_EXPORT_TIMEOUT",
    "BSP_MAX_EXPORT_BATCH_SIZE",
    "BSP_MAX_QUEUE_SIZE",
    "BSP_SCHEDULE_DELAY",
    "CUSTOMIZER_PROVIDERS_GROUP",
    "DEFAULT_LOGS_EXPORTER",
    "DEFAULT_METRICS_EXPORTER",
    "DEFAULT_METRIC_EXPORT_INTERVAL_MILLIS",
    "DEFAULT_PROPAGATORS",
    "DEFAULT_SERVICE_NAME",
    "DEFAULT_SAMPLER",
    "DEFAULT_TRACES_EXPORTER",
    "INSTRUMENTATION_SCOPE",
    "LOGGING_EXPORTER",
    "LOGS_EXPORTER",
    "LOG_EXPORTERS_GROUP",
    "METRICS_EXPORTER",
    "METRIC_EXPORTERS_GROUP",
    "METRIC_EXPORT_INTERVAL",
    "NONE_EXPORTER",
    "OTLP_EXPORTER",
    "PROPAGATORS",
    "PROPAGATORS_GROUP",
    "RESOURCE_ATTRIBUTES",
    "SERVICE_NAME",
    "SHUTDOWN_TIMEOUT_SECONDS",
    "SPAN_EXPORTERS_GROUP",
    "TRACER_PROVIDER_CONFIGURERS_GROUP",
    "TRACES_EXPORTER",
    "TRACES_SAMPLER",
    "TRACES_SAMPLER_ARG",
]
