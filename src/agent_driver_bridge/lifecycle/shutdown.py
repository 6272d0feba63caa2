"""Exactly-once teardown of a bridged session.

A bridged session can end in several ways: an explicit ``stop()``/``quit()``,
leaving a ``with`` block, a failed construction, or interpreter exit when
the caller never stopped it.  ``ShutdownCoordinator`` makes all of them
converge on one teardown that runs exactly once; ``ShutdownHandle`` is the
disposable through which every trigger reaches it, and registers itself
with ``atexit`` as a safety net.

Classes
-------
- ShutdownState        — ACTIVE → STOPPING → STOPPED
- ShutdownCoordinator  — lock-guarded, run-once teardown
- ShutdownHandle       — idempotent disposable with an atexit fallback
"""
from __future__ import annotations

import atexit
import logging
import threading
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class ShutdownState(str, Enum):
    """Lifecycle states of a bridged session."""

    ACTIVE = "active"
    STOPPING = "stopping"
    STOPPED = "stopped"


class ShutdownCoordinator:
    """Run a teardown callable at most once, whatever triggers it.

    Parameters
    ----------
    teardown:
        Callable performing the actual teardown.
    name:
        Label used in log messages, typically the session ID.
    """

    def __init__(self, teardown: Callable[[], None], name: str = "") -> None:
        self._teardown = teardown
        self._name = name
        self._lock = threading.Lock()
        self._state = ShutdownState.ACTIVE

    @property
    def state(self) -> ShutdownState:
        """Current lifecycle state."""
        return self._state

    def shutdown(self) -> bool:
        """Tear down if still active.

        Returns
        -------
        bool
            True if this call performed the teardown, False if it was
            already stopping or stopped.
        """
        with self._lock:
            if self._state is not ShutdownState.ACTIVE:
                logger.info(
                    "ShutdownCoordinator: session %r already %s, skipping shutdown",
                    self._name,
                    self._state.value,
                )
                return False
            self._state = ShutdownState.STOPPING

        try:
            self._teardown()
        finally:
            self._state = ShutdownState.STOPPED
            logger.debug("ShutdownCoordinator: session %r stopped", self._name)
        return True


class ShutdownHandle:
    """Disposable that triggers the coordinator.

    Created together with the bridged driver.  Until disposed it is
    registered with ``atexit`` so a forgotten session is still released
    when the interpreter exits.

    Parameters
    ----------
    coordinator:
        The coordinator to trigger on disposal.
    register_atexit:
        Register ``dispose`` with ``atexit``.  Defaults to True.
    """

    def __init__(self, coordinator: ShutdownCoordinator, register_atexit: bool = True) -> None:
        self._coordinator = coordinator
        self._registered = register_atexit
        if register_atexit:
            atexit.register(self.dispose)

    @property
    def coordinator(self) -> ShutdownCoordinator:
        """The coordinator this handle triggers."""
        return self._coordinator

    def dispose(self) -> bool:
        """Trigger teardown.  Safe to call any number of times.

        Returns
        -------
        bool
            True if this call performed the teardown.
        """
        if self._registered:
            self._registered = False
            atexit.unregister(self.dispose)
        return self._coordinator.shutdown()

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> ShutdownHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.dispose()
