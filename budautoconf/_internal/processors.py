"""Span and log record processors used by auto-configuration.

The batch processors report how many items they exported, and whether the
export failed, to the auto-configured meter provider. The counters follow
the OTEL semantic conventions for SDK self-monitoring:

    otel.sdk.processor.span.processed{otel.component.type, error.type}
    otel.sdk.processor.log.processed{otel.component.type, error.type}
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from opentelemetry.metrics import MeterProvider
from opentelemetry.sdk._logs.export import (
    BatchLogRecordProcessor,
    LogExporter,
    LogExportResult,
    SimpleLogRecordProcessor,
)
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SpanExporter,
    SpanExportResult,
)

from budautoconf._internal.constants import INSTRUMENTATION_SCOPE
from budautoconf._internal.version import __version__


class _ProcessedCounter:
    """Counts exported items per processor type."""

    def __init__(self, meter_provider: MeterProvider, name: str, unit: str, component_type: str) -> None:
        meter = meter_provider.get_meter(INSTRUMENTATION_SCOPE, __version__)
        self._counter = meter.create_counter(
            name,
            unit=unit,
            description="The number of items exported by the processor",
        )
        self._attributes = {"otel.component.type": component_type}

    def record(self, count: int, success: bool) -> None:
        if count == 0:
            return
        attributes = self._attributes if success else {**self._attributes, "error.type": "export_failed"}
        self._counter.add(count, attributes)


class _MeteredSpanExporter(SpanExporter):
    def __init__(self, exporter: SpanExporter, counter: _ProcessedCounter) -> None:
        self._exporter = exporter
        self._counter = counter

    def export(self, spans: Sequence[Any]) -> SpanExportResult:
        result = self._exporter.export(spans)
        self._counter.record(len(spans), result is SpanExportResult.SUCCESS)
        return result

    def shutdown(self) -> None:
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._exporter.force_flush(timeout_millis)


class _MeteredLogExporter(LogExporter):
    def __init__(self, exporter: LogExporter, counter: _ProcessedCounter) -> None:
        self._exporter = exporter
        self._counter = counter

    def export(self, batch: Sequence[Any]) -> LogExportResult:
        result = self._exporter.export(batch)
        self._counter.record(len(batch), result is LogExportResult.SUCCESS)
        return result

    def shutdown(self) -> None:
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        # LogExporter does not declare force_flush; only some implementations define it
        if hasattr(self._exporter, "force_flush"):
            return self._exporter.force_flush(timeout_millis)
        return True


class SimpleLogProcessor(SimpleLogRecordProcessor):
    """Forwards every log record to the exporter as soon as it is emitted."""

    def __init__(self, exporter: LogExporter) -> None:
        super().__init__(exporter)
        self.exporter = exporter


class MeteredBatchLogProcessor(BatchLogRecordProcessor):
    """Batch log record processor reporting exported record counts."""

    def __init__(
        self,
        exporter: LogExporter,
        meter_provider: MeterProvider,
        *,
        schedule_delay_millis: float | None = None,
        max_export_batch_size: int | None = None,
        export_timeout_millis: float | None = None,
        max_queue_size: int | None = None,
    ) -> None:
        counter = _ProcessedCounter(
            meter_provider,
            "otel.sdk.processor.log.processed",
            "{log_record}",
            "batching_log_processor",
        )
        super().__init__(
            _MeteredLogExporter(exporter, counter),
            schedule_delay_millis=schedule_delay_millis,
            max_export_batch_size=max_export_batch_size,
            export_timeout_millis=export_timeout_millis,
            max_queue_size=max_queue_size,
        )
        self.exporter = exporter
        self.meter_provider = meter_provider


class MeteredBatchSpanProcessor(BatchSpanProcessor):
    """Batch span processor reporting exported span counts."""

    def __init__(
        self,
        exporter: SpanExporter,
        meter_provider: MeterProvider,
        *,
        schedule_delay_millis: float | None = None,
        max_export_batch_size: int | None = None,
        export_timeout_millis: float | None = None,
        max_queue_size: int | None = None,
    ) -> None:
        counter = _ProcessedCounter(
            meter_provider,
            "otel.sdk.processor.span.processed",
            "{span}",
            "batching_span_processor",
        )
        super().__init__(
            _MeteredSpanExporter(exporter, counter),
            max_queue_size=max_queue_size,
            schedule_delay_millis=schedule_delay_millis,
            max_export_batch_size=max_export_batch_size,
            export_timeout_millis=export_timeout_millis,
        )
        self.exporter = exporter
        self.meter_provider = meter_provider
