"""Basic import tests for budautoconf.

These tests verify that the package structure is correct and all
modules can be imported without errors.
"""

from __future__ import annotations


def test_import_budautoconf() -> None:
    """Test that budautoconf package can be imported."""
    import budautoconf

    assert budautoconf is not None


def test_import_version() -> None:
    """Test that version is accessible."""
    from budautoconf import __version__

    assert isinstance(__version__, str)
    assert __version__ == "0.1.0"


def test_import_types() -> None:
    """Test that types module can be imported."""
    from budautoconf.types import Customizer, CustomizerProvider, ExporterProvider, PropertiesSupplier

    assert Customizer is not None
    assert CustomizerProvider is not None
    assert ExporterProvider is not None
    assert PropertiesSupplier is not None


def test_import_internal_constants() -> None:
    """Test that internal constants module can be imported."""
    from budautoconf._internal import constants

    assert constants.TRACES_EXPORTER == "otel.traces.exporter"
    assert constants.LOGGING_EXPORTER == "logging"
    assert constants.SHUTDOWN_TIMEOUT_SECONDS == 10.0


def test_public_api_exports() -> None:
    """Test that every name in __all__ resolves."""
    import budautoconf

    for name in budautoconf.__all__:
        assert hasattr(budautoconf, name), name
