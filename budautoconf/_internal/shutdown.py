"""Bounded, concurrent shutdown of assembled providers.

Each provider is shut down on its own worker thread so that a slow provider
does not delay the others. The coordinator waits for all workers up to a
fixed deadline and then returns, whether or not every provider finished.
Work still running past the deadline is not interrupted.

Workers are started when the coordinator is armed and block until shutdown
is triggered. ``register_shutdown`` arms the coordinator at registration,
because new threads cannot be started while the interpreter is exiting.
"""

from __future__ import annotations

import atexit
import threading
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog

from budautoconf._internal.constants import SHUTDOWN_TIMEOUT_SECONDS

if TYPE_CHECKING:
    from budautoconf._internal.sdk import ProviderBundle

logger = structlog.get_logger(__name__)


class ShutdownCoordinator:
    """Shuts down a fixed set of providers concurrently with a deadline.

    Provider shutdown is invoked at most once; calling ``shutdown()`` again
    only waits for the outcome of the first call.
    """

    def __init__(self, providers: Mapping[str, Any], timeout: float = SHUTDOWN_TIMEOUT_SECONDS) -> None:
        """Initialize the coordinator.

        Args:
            providers: Objects with a ``shutdown()`` method, keyed by a name used in logs.
            timeout: Seconds to wait for all providers once shutdown is triggered.
        """
        self._providers = dict(providers)
        self._timeout = timeout
        self._lock = threading.Lock()
        self._trigger = threading.Event()
        self._done: dict[str, threading.Event] = {}
        self._errors: dict[str, BaseException] = {}
        self._armed = False

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def is_armed(self) -> bool:
        return self._armed

    @property
    def errors(self) -> dict[str, BaseException]:
        """Exceptions raised by provider shutdowns, keyed by provider name."""
        with self._lock:
            return dict(self._errors)

    def arm(self) -> None:
        """Start one waiting worker per provider. Idempotent."""
        with self._lock:
            if self._armed:
                return
            for name, provider in self._providers.items():
                done = threading.Event()
                self._done[name] = done
                threading.Thread(
                    target=self._run,
                    args=(name, provider, done),
                    name=f"budautoconf-shutdown-{name}",
                    daemon=True,
                ).start()
            self._armed = True

    def _run(self, name: str, provider: Any, done: threading.Event) -> None:
        self._trigger.wait()
        try:
            provider.shutdown()
        except Exception as e:
            with self._lock:
                self._errors[name] = e
            logger.warning("provider_shutdown_failed", provider=name, error=str(e))
        finally:
            done.set()

    def shutdown(self) -> bool:
        """Shut down every provider and wait up to the deadline.

        Returns:
            True if every provider finished without error before the deadline.
        """
        self.arm()
        self._trigger.set()

        deadline = time.monotonic() + self._timeout
        pending = [name for name, done in self._done.items() if not done.wait(max(0.0, deadline - time.monotonic()))]
        if pending:
            logger.warning("shutdown_timed_out", pending=pending, timeout=self._timeout)
            return False

        errors = self.errors
        logger.debug("shutdown_complete", providers=list(self._providers), failed=list(errors))
        return not errors


def register_shutdown(bundle: ProviderBundle) -> ShutdownCoordinator:
    """Shut down ``bundle``'s providers when the interpreter exits.

    The embedding application calls this explicitly if it wants exit-time
    cleanup. The exit handler returns once every provider is shut down or
    the bundle's shutdown deadline elapses.

    Returns:
        The armed coordinator registered with ``atexit``.
    """
    coordinator = bundle.coordinator
    coordinator.arm()
    atexit.register(coordinator.shutdown)
    logger.debug("shutdown_hook_registered", timeout=coordinator.timeout)
    return coordinator
