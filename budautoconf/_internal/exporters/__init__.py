"""Exporters for budautoconf.

This package contains:
- Named exporter factories (otlp, logging, plugin-provided)
- Fan-out exporters combining several exporters into one
"""

from __future__ import annotations

from budautoconf._internal.exporters.composite import MultiLogExporter, MultiSpanExporter
from budautoconf._internal.exporters.named import (
    ExporterProvider,
    configure_exporters,
    configure_log_exporters,
    configure_metric_exporters,
    configure_span_exporters,
)

__all__ = [
    "ExporterProvider",
    "MultiLogExporter",
    "MultiSpanExporter",
    "configure_exporters",
    "configure_log_exporters",
    "configure_metric_exporters",
    "configure_span_exporters",
]
