"""Process-wide default bundle.

Installing a bundle as the default registers its providers and propagator
with the OTEL API globals, so libraries calling ``trace.get_tracer_provider()``
etc. use the auto-configured SDK.

The default is assigned once. Installing the same bundle again is a no-op;
installing a different bundle afterwards logs a warning, leaves the first
one in place and returns False. If the OTEL API refuses any of the
bundle's providers because another component set that global first, the
bundle is not recorded, the propagator is left unchanged and False is
returned.
"""

from __future__ import annotations

from threading import Lock

import structlog
from opentelemetry import metrics as otel_metrics
from opentelemetry import propagate as otel_propagate
from opentelemetry import trace as otel_trace
from opentelemetry._logs import get_logger_provider, set_logger_provider

from budautoconf._internal.sdk import AutoConfiguredSdkBuilder, ProviderBundle

logger = structlog.get_logger(__name__)

# Global default bundle, assigned at most once
_default_bundle: ProviderBundle | None = None
_default_lock = Lock()


def install_as_default(bundle: ProviderBundle) -> bool:
    """Install ``bundle`` as the process-wide OTEL default.

    Args:
        bundle: The bundle to install.

    Returns:
        True if ``bundle`` is the default after the call, False if another
        bundle was installed first or the OTEL API kept a provider set
        elsewhere.
    """
    global _default_bundle
    with _default_lock:
        if _default_bundle is bundle:
            return True
        if _default_bundle is not None:
            logger.warning("default_bundle_already_installed")
            return False

        otel_trace.set_tracer_provider(bundle.tracer_provider)
        otel_metrics.set_meter_provider(bundle.meter_provider)
        set_logger_provider(bundle.logger_provider)

        # The OTEL API keeps the first provider set for each signal
        rejected = [
            name
            for name, installed, provider in (
                ("tracer_provider", otel_trace.get_tracer_provider(), bundle.tracer_provider),
                ("meter_provider", otel_metrics.get_meter_provider(), bundle.meter_provider),
                ("logger_provider", get_logger_provider(), bundle.logger_provider),
            )
            if installed is not provider
        ]
        if rejected:
            logger.warning("default_bundle_rejected", rejected=rejected)
            return False

        otel_propagate.set_global_textmap(bundle.propagator)
        _default_bundle = bundle

    logger.debug("default_bundle_installed", resource=dict(bundle.resource.attributes))
    return True


def get_default_bundle() -> ProviderBundle | None:
    """Get the installed default bundle, if any."""
    return _default_bundle


def initialize() -> ProviderBundle:
    """Auto-configure the SDK from the environment and installed plugins.

    This is the primary way to initialize budautoconf: the resulting bundle
    is installed as the process default and shut down at interpreter exit.

    Returns:
        The assembled ProviderBundle.

    Example:
        >>> import budautoconf
        >>> bundle = budautoconf.initialize()
    """
    return AutoConfiguredSdkBuilder().register_shutdown_hook(True).set_result_as_global(True).build()
