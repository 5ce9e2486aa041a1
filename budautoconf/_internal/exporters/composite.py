"""Fan-out exporters that forward every batch to several delegates."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from opentelemetry.sdk._logs.export import LogExporter, LogExportResult
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult


class MultiSpanExporter(SpanExporter):
    """Span exporter that exports to every delegate.

    The batch succeeds only if every delegate reports success.
    """

    def __init__(self, exporters: Iterable[SpanExporter]) -> None:
        self._exporters: tuple[SpanExporter, ...] = tuple(exporters)

    @property
    def exporters(self) -> tuple[SpanExporter, ...]:
        return self._exporters

    def export(self, spans: Sequence[Any]) -> SpanExportResult:
        result = SpanExportResult.SUCCESS
        for exporter in self._exporters:
            if exporter.export(spans) is not SpanExportResult.SUCCESS:
                result = SpanExportResult.FAILURE
        return result

    def shutdown(self) -> None:
        for exporter in self._exporters:
            exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        success = True
        for exporter in self._exporters:
            success = exporter.force_flush(timeout_millis) and success
        return success


class MultiLogExporter(LogExporter):
    """Log exporter that exports to every delegate.

    The batch succeeds only if every delegate reports success.
    """

    def __init__(self, exporters: Iterable[LogExporter]) -> None:
        self._exporters: tuple[LogExporter, ...] = tuple(exporters)

    @property
    def exporters(self) -> tuple[LogExporter, ...]:
        return self._exporters

    def export(self, batch: Sequence[Any]) -> LogExportResult:
        result = LogExportResult.SUCCESS
        for exporter in self._exporters:
            if exporter.export(batch) is not LogExportResult.SUCCESS:
                result = LogExportResult.FAILURE
        return result

    def shutdown(self) -> None:
        for exporter in self._exporters:
            exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        success = True
        for exporter in self._exporters:
            # LogExporter does not declare force_flush; only some implementations define it
            if hasattr(exporter, "force_flush"):
                success = exporter.force_flush(timeout_millis) and success
        return success
