"""Trace pipeline configuration.

The OTEL Python SDK builds a ``TracerProvider`` in one constructor call, so
customizers operate on ``TracerProviderBuilder``, a mutable holder of the
provider's settings. Customizers may set any option or add span processors;
``build()`` is called once, after every customizer has run.

Architecture:
    TracerProviderBuilder -> customizers -> build() -> TracerProvider
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

import structlog
from opentelemetry.metrics import MeterProvider
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanLimits, SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor, SpanExporter
from opentelemetry.sdk.trace.id_generator import IdGenerator
from opentelemetry.sdk.trace.sampling import (
    ALWAYS_OFF,
    ALWAYS_ON,
    ParentBased,
    ParentBasedTraceIdRatio,
    Sampler,
    TraceIdRatioBased,
)

from budautoconf._internal.config import ConfigProperties
from budautoconf._internal.constants import (
    BSP_EXPORT_TIMEOUT,
    BSP_MAX_EXPORT_BATCH_SIZE,
    BSP_MAX_QUEUE_SIZE,
    BSP_SCHEDULE_DELAY,
    DEFAULT_SAMPLER,
    LOGGING_EXPORTER,
    TRACES_SAMPLER,
    TRACES_SAMPLER_ARG,
)
from budautoconf._internal.customizers import Customizer
from budautoconf._internal.discovery import PluginLoader
from budautoconf._internal.exceptions import ConfigurationError
from budautoconf._internal.exporters import MultiSpanExporter, configure_span_exporters
from budautoconf._internal.processors import MeteredBatchSpanProcessor

logger = structlog.get_logger(__name__)


class TracerProviderBuilder:
    """Mutable settings for an SDK TracerProvider.

    Example:
        >>> builder = TracerProviderBuilder().set_resource(resource)
        >>> builder.add_span_processor(SimpleSpanProcessor(exporter))
        >>> provider = builder.build()
    """

    def __init__(self) -> None:
        self._resource: Resource | None = None
        self._sampler: Sampler | None = None
        self._id_generator: IdGenerator | None = None
        self._span_limits: SpanLimits | None = None
        self._span_processors: list[SpanProcessor] = []

    @property
    def resource(self) -> Resource | None:
        return self._resource

    @property
    def sampler(self) -> Sampler | None:
        return self._sampler

    @property
    def span_processors(self) -> tuple[SpanProcessor, ...]:
        return tuple(self._span_processors)

    def set_resource(self, resource: Resource) -> TracerProviderBuilder:
        self._resource = resource
        return self

    def set_sampler(self, sampler: Sampler) -> TracerProviderBuilder:
        self._sampler = sampler
        return self

    def set_id_generator(self, id_generator: IdGenerator) -> TracerProviderBuilder:
        self._id_generator = id_generator
        return self

    def set_span_limits(self, span_limits: SpanLimits) -> TracerProviderBuilder:
        self._span_limits = span_limits
        return self

    def add_span_processor(self, span_processor: SpanProcessor) -> TracerProviderBuilder:
        self._span_processors.append(span_processor)
        return self

    def build(self) -> TracerProvider:
        """Create the TracerProvider.

        The provider does not register its own exit handler; shutdown is
        owned by whoever holds the provider bundle.
        """
        provider = TracerProvider(
            sampler=self._sampler,
            resource=self._resource,
            shutdown_on_exit=False,
            id_generator=self._id_generator,
            span_limits=self._span_limits,
        )
        for span_processor in self._span_processors:
            provider.add_span_processor(span_processor)
        return provider


def _ratio_sampler(config: ConfigProperties, sampler_cls: Callable[[float], Sampler]) -> Sampler:
    # Only ratio samplers read the argument
    ratio = config.get_float(TRACES_SAMPLER_ARG, 1.0)
    try:
        return sampler_cls(ratio)
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {TRACES_SAMPLER_ARG}: {ratio}", key=TRACES_SAMPLER_ARG) from e


def configure_sampler(config: ConfigProperties) -> Sampler:
    """Create the sampler named by ``otel.traces.sampler``.

    Raises:
        ConfigurationError: If the sampler name or ratio is invalid.
    """
    name = config.get_string(TRACES_SAMPLER, DEFAULT_SAMPLER).lower()

    if name == "always_on":
        return ALWAYS_ON
    if name == "always_off":
        return ALWAYS_OFF
    if name == "parentbased_always_on":
        return ParentBased(root=ALWAYS_ON)
    if name == "parentbased_always_off":
        return ParentBased(root=ALWAYS_OFF)
    if name == "traceidratio":
        return _ratio_sampler(config, TraceIdRatioBased)
    if name == "parentbased_traceidratio":
        return _ratio_sampler(config, ParentBasedTraceIdRatio)

    raise ConfigurationError(f"Unrecognized value for {TRACES_SAMPLER}: {name}", key=TRACES_SAMPLER)


def configure_span_processors(
    exporters_by_name: Mapping[str, SpanExporter],
    meter_provider: MeterProvider,
    config: ConfigProperties,
) -> list[SpanProcessor]:
    """Select processors for span exporters.

    ``logging`` gets a simple processor; every other exporter is combined
    behind one batch span processor.
    """
    remaining = dict(exporters_by_name)
    processors: list[SpanProcessor] = []

    exporter = remaining.pop(LOGGING_EXPORTER, None)
    if exporter is not None:
        processors.append(SimpleSpanProcessor(exporter))

    if remaining:
        processors.append(
            MeteredBatchSpanProcessor(
                MultiSpanExporter(remaining.values()),
                meter_provider,
                schedule_delay_millis=config.get_duration_millis(BSP_SCHEDULE_DELAY),
                max_export_batch_size=config.get_int(BSP_MAX_EXPORT_BATCH_SIZE),
                export_timeout_millis=config.get_duration_millis(BSP_EXPORT_TIMEOUT),
                max_queue_size=config.get_int(BSP_MAX_QUEUE_SIZE),
            )
        )

    return processors


def configure_tracer_provider(
    builder: TracerProviderBuilder,
    config: ConfigProperties,
    loader: PluginLoader,
    meter_provider: MeterProvider,
    span_exporter_customizer: Customizer[SpanExporter],
    sampler_customizer: Customizer[Sampler],
) -> None:
    """Apply the configured sampler, exporters and processors to ``builder``.

    Each exporter passes through ``span_exporter_customizer`` and the sampler
    passes through ``sampler_customizer`` before they are installed.
    """
    builder.set_sampler(sampler_customizer(configure_sampler(config), config))

    exporters_by_name = {
        name: span_exporter_customizer(exporter, config)
        for name, exporter in configure_span_exporters(config, loader).items()
    }
    for span_processor in configure_span_processors(exporters_by_name, meter_provider, config):
        builder.add_span_processor(span_processor)

    logger.debug("tracer_provider_configured", exporters=list(exporters_by_name))
