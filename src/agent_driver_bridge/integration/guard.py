"""Test-framework integration check run once per bridged driver.

Some test frameworks report through a companion plugin.  When such a
framework drives the session, the bridge must not report commands and test
outcomes itself, and if the plugin is missing the session cannot be
reported correctly at all, so construction is aborted.

The framework is taken from an explicit setting when one is given;
otherwise a best-effort detection looks for the framework's runner among
the loaded modules.  Companion plugins announce themselves as entry points
in the ``agent_driver_bridge.plugins`` group, e.g. in the plugin's
pyproject.toml:

.. code-block:: toml

    [project.entry-points."agent_driver_bridge.plugins"]
    behave = "my_plugin.behave:install"

Classes
-------
- FrameworkKind   — frameworks the guard knows about
- FrameworkGuard  — detect / apply
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable
from enum import Enum
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

from agent_driver_bridge.exceptions import BridgeError, IntegrationMissingError
from agent_driver_bridge.reporting.models import DriverCommandsFilter

if TYPE_CHECKING:
    from agent_driver_bridge.reporting.reporter import Reporter

logger = logging.getLogger(__name__)

PLUGIN_ENTRY_POINT_GROUP = "agent_driver_bridge.plugins"


class FrameworkKind(str, Enum):
    """Test frameworks with special reporting needs."""

    NONE = "none"
    BEHAVE = "behave"


# Framework → entry-point name of its companion reporting plugin.
_COMPANION_PLUGINS: dict[FrameworkKind, str] = {
    FrameworkKind.BEHAVE: "behave",
}

# Framework → module whose presence means the framework is running.
_RUNNER_MODULES: dict[FrameworkKind, str] = {
    FrameworkKind.BEHAVE: "behave.runner",
}


def installed_plugins() -> set[str]:
    """Return the names of the plugins registered in the entry-point group."""
    return {ep.name for ep in entry_points(group=PLUGIN_ENTRY_POINT_GROUP)}


class FrameworkGuard:
    """Decide and apply framework-specific reporting behaviour.

    Parameters
    ----------
    framework:
        Explicit framework declaration.  ``None`` falls back to detection.
    plugins:
        Installed plugin names.  Read from entry points when omitted.
    """

    def __init__(
        self,
        framework: FrameworkKind | None = None,
        plugins: Iterable[str] | None = None,
    ) -> None:
        self._framework = framework
        self._plugins = set(plugins) if plugins is not None else None

    def detect(self) -> FrameworkKind:
        """Return the framework driving this process."""
        if self._framework is not None:
            return self._framework
        for kind, module in _RUNNER_MODULES.items():
            if module in sys.modules:
                logger.debug("FrameworkGuard: detected %s via %r", kind.value, module)
                return kind
        return FrameworkKind.NONE

    def plugin_installed(self, kind: FrameworkKind) -> bool:
        """Return True if ``kind`` needs no plugin or its plugin is installed."""
        plugin = _COMPANION_PLUGINS.get(kind)
        if plugin is None:
            return True
        plugins = self._plugins if self._plugins is not None else installed_plugins()
        return plugin in plugins

    def apply(self, reporter: Reporter, shutdown: Callable[[], object]) -> FrameworkKind:
        """Run the check for a freshly constructed driver.

        Parameters
        ----------
        reporter:
            Reporter of the new session.
        shutdown:
            Tears the new session down if construction must be aborted.

        Returns
        -------
        FrameworkKind
            The framework that was acted on.

        Raises
        ------
        IntegrationMissingError
            If the framework's companion plugin is not installed.  The
            session has been torn down by then.
        """
        kind = self.detect()
        if kind not in _COMPANION_PLUGINS:
            return kind

        if not self.plugin_installed(kind):
            message = (
                f"The reporting plugin for {kind.value} is not installed, "
                "please install the plugin and run the test again."
            )
            try:
                reporter.step(description=message, passed=False)
            except BridgeError as exc:
                logger.warning("FrameworkGuard: could not report missing plugin: %s", exc)
            logger.error(message)
            shutdown()
            raise IntegrationMissingError(message)

        reporter.disable_command_reports(DriverCommandsFilter.ALL)
        reporter.disable_auto_test_reports(True)
        logger.info("%s detected, applying %s-specific reporting settings", kind.value, kind.value)
        return kind
