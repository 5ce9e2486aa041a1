"""Tests for named exporter selection and fan-out exporters."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk._logs.export import LogExporter, LogExportResult
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SpanExporter, SpanExportResult

from budautoconf import ConfigProperties, ConfigurationError
from budautoconf._internal.constants import SPAN_EXPORTERS_GROUP
from budautoconf._internal.exporters import (
    MultiLogExporter,
    MultiSpanExporter,
    configure_span_exporters,
)
from budautoconf._internal.exporters.named import _otlp_options
from budautoconf.testing import StaticPluginLoader


class ZipkinProvider:
    """Exporter provider plugin contributing the 'zipkin' name."""

    name = "zipkin"

    def __init__(self) -> None:
        self.exporter = MagicMock(spec=SpanExporter)

    def create_exporter(self, config: ConfigProperties) -> SpanExporter:
        return self.exporter


class NoFlushLogExporter:
    """Log exporter offering only export and shutdown."""

    def export(self, batch: Any) -> LogExportResult:
        return LogExportResult.SUCCESS

    def shutdown(self) -> None:
        pass


class TestConfigureExporters:
    """Tests for exporter selection by name."""

    def test_none_yields_no_exporters(self) -> None:
        """'none' disables the signal."""
        config = ConfigProperties({"otel.traces.exporter": "none"})
        assert configure_span_exporters(config, StaticPluginLoader()) == {}

    def test_none_with_other_names_rejected(self) -> None:
        """'none' cannot be combined with real exporters."""
        config = ConfigProperties({"otel.traces.exporter": "none,logging"})
        with pytest.raises(ConfigurationError, match="none") as exc_info:
            configure_span_exporters(config, StaticPluginLoader())
        assert exc_info.value.key == "otel.traces.exporter"

    def test_unknown_name_rejected(self) -> None:
        """Names matching neither a built-in nor a plugin raise."""
        config = ConfigProperties({"otel.traces.exporter": "jaeger"})
        with pytest.raises(ConfigurationError, match="Unrecognized value for otel.traces.exporter: jaeger"):
            configure_span_exporters(config, StaticPluginLoader())

    def test_builtin_logging(self) -> None:
        """'logging' maps to the console exporter without consulting plugins."""
        config = ConfigProperties({"otel.traces.exporter": "logging"})
        loader = StaticPluginLoader()

        exporters = configure_span_exporters(config, loader)

        assert list(exporters) == ["logging"]
        assert isinstance(exporters["logging"], ConsoleSpanExporter)
        assert SPAN_EXPORTERS_GROUP not in loader.load_counts

    def test_plugin_provider_by_name(self) -> None:
        """Non built-in names resolve through exporter provider plugins."""
        provider = ZipkinProvider()
        loader = StaticPluginLoader({SPAN_EXPORTERS_GROUP: [provider]})
        config = ConfigProperties({"otel.traces.exporter": "logging,zipkin,zipkin"})

        exporters = configure_span_exporters(config, loader)

        assert list(exporters) == ["logging", "zipkin"]
        assert exporters["zipkin"] is provider.exporter
        assert loader.load_counts[SPAN_EXPORTERS_GROUP] == 1

    def test_default_is_otlp(self) -> None:
        """Without a property traces export over OTLP."""
        exporters = configure_span_exporters(ConfigProperties({}), StaticPluginLoader())
        try:
            assert isinstance(exporters["otlp"], OTLPSpanExporter)
        finally:
            exporters["otlp"].shutdown()


class TestOtlpOptions:
    """Tests for OTLP exporter option mapping."""

    def test_base_endpoint_gets_signal_path(self) -> None:
        """The generic endpoint is suffixed with the signal path."""
        config = ConfigProperties({"otel.exporter.otlp.endpoint": "http://collector:4318/"})
        assert _otlp_options(config, "traces") == {"endpoint": "http://collector:4318/v1/traces"}

    def test_signal_specific_keys_win(self) -> None:
        """Signal-specific endpoint, headers and timeout override the generic ones."""
        config = ConfigProperties(
            {
                "otel.exporter.otlp.endpoint": "http://collector:4318",
                "otel.exporter.otlp.logs.endpoint": "http://logs:4318/custom",
                "otel.exporter.otlp.headers": "auth=generic,tenant=bud",
                "otel.exporter.otlp.logs.headers": "auth=logs",
                "otel.exporter.otlp.timeout": "10s",
                "otel.exporter.otlp.logs.timeout": "2500ms",
            }
        )

        assert _otlp_options(config, "logs") == {
            "endpoint": "http://logs:4318/custom",
            "headers": {"auth": "logs", "tenant": "bud"},
            "timeout": 2.5,
        }

    def test_empty_config_yields_no_options(self) -> None:
        """Exporter defaults apply when nothing is configured."""
        assert _otlp_options(ConfigProperties({}), "metrics") == {}


class TestMultiSpanExporter:
    """Tests for MultiSpanExporter."""

    def test_export_reaches_every_delegate(self) -> None:
        """Every delegate sees the batch; any failure fails the batch."""
        ok = MagicMock(spec=SpanExporter)
        ok.export.return_value = SpanExportResult.SUCCESS
        failing = MagicMock(spec=SpanExporter)
        failing.export.return_value = SpanExportResult.FAILURE
        spans = [MagicMock()]

        assert MultiSpanExporter([ok]).export(spans) is SpanExportResult.SUCCESS
        assert MultiSpanExporter([failing, ok]).export(spans) is SpanExportResult.FAILURE
        failing.export.assert_called_once_with(spans)
        assert ok.export.call_count == 2

    def test_shutdown_and_flush_delegate(self) -> None:
        """shutdown and force_flush reach every delegate."""
        first = MagicMock(spec=SpanExporter)
        first.force_flush.return_value = True
        second = MagicMock(spec=SpanExporter)
        second.force_flush.return_value = False
        exporter = MultiSpanExporter([first, second])

        assert exporter.force_flush(1000) is False
        exporter.shutdown()

        first.force_flush.assert_called_once_with(1000)
        second.force_flush.assert_called_once_with(1000)
        first.shutdown.assert_called_once()
        second.shutdown.assert_called_once()


class TestMultiLogExporter:
    """Tests for MultiLogExporter."""

    def test_export_reaches_every_delegate(self) -> None:
        """Every delegate sees the batch; any failure fails the batch."""
        ok = MagicMock(spec=LogExporter)
        ok.export.return_value = LogExportResult.SUCCESS
        failing = MagicMock(spec=LogExporter)
        failing.export.return_value = LogExportResult.FAILURE

        assert MultiLogExporter([ok, failing]).export([]) is LogExportResult.FAILURE
        ok.export.assert_called_once_with([])
        failing.export.assert_called_once_with([])

    def test_force_flush_skips_exporters_without_flush(self) -> None:
        """Delegates lacking force_flush are skipped; the others decide the result."""
        no_flush: Any = NoFlushLogExporter()
        flushing = MagicMock(spec=LogExporter)
        flushing.force_flush = MagicMock(return_value=False)

        assert MultiLogExporter([no_flush, flushing]).force_flush(500) is False
        flushing.force_flush.assert_called_once_with(500)
        assert MultiLogExporter([no_flush]).force_flush() is True
