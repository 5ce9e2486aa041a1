"""Shared fixtures for budautoconf tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from budautoconf import AutoConfiguredSdkBuilder, ConfigProperties
from budautoconf.testing import StaticPluginLoader

# Disables every exporter so no test talks to a collector
QUIET_PROPERTIES = {
    "otel.traces.exporter": "none",
    "otel.metrics.exporter": "none",
    "otel.logs.exporter": "none",
}


@pytest.fixture
def config() -> ConfigProperties:
    """Configuration snapshot with all exporters disabled."""
    return ConfigProperties(QUIET_PROPERTIES)


@pytest.fixture
def loader() -> StaticPluginLoader:
    """Plugin loader with no plugins."""
    return StaticPluginLoader()


@pytest.fixture
def quiet_builder(loader: StaticPluginLoader) -> Iterator[AutoConfiguredSdkBuilder]:
    """Builder isolated from installed plugins and from OTEL_* exporter variables."""
    yield AutoConfiguredSdkBuilder().set_plugin_loader(loader).set_process_properties(QUIET_PROPERTIES)


@pytest.fixture
def quiet_properties() -> dict[str, str]:
    """Process properties disabling every exporter, for tests that add their own."""
    return dict(QUIET_PROPERTIES)
