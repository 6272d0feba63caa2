"""Reporting handle exposed by ``BridgedDriver.report()``.

Classes
-------
- Reporter  — step/test reports and reporting switches for one session
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from agent_driver_bridge.reporting.models import DriverCommandsFilter, StepReport, TestReport

if TYPE_CHECKING:
    from agent_driver_bridge.routing.router import CommandRouter

logger = logging.getLogger(__name__)


class Reporter:
    """Send explicit reports and adjust automatic reporting.

    Parameters
    ----------
    router:
        The router of the session being reported on.
    """

    def __init__(self, router: CommandRouter) -> None:
        self._router = router

    def step(self, description: str, message: str = "", passed: bool = True) -> None:
        """Report a step.

        Parameters
        ----------
        description:
            What the step did.
        message:
            Optional detail, typically the failure reason.
        passed:
            Step outcome.
        """
        self._router.send_step(StepReport(description=description, message=message, passed=passed))

    def test(self, name: str, passed: bool = True, message: str = "") -> None:
        """Report a test outcome explicitly."""
        self._router.send_test(TestReport(name=name, passed=passed, message=message))

    def disable_command_reports(self, commands_filter: DriverCommandsFilter) -> None:
        """Suppress driver-command reports matching ``commands_filter``."""
        self._router.reporting.command_filter = commands_filter
        logger.debug("Reporter: command report filter set to %s", commands_filter.name)

    def disable_auto_test_reports(self, disabled: bool = True) -> None:
        """Turn automatic test reports off (or back on)."""
        self._router.reporting.auto_test_reports = not disabled
        logger.debug("Reporter: automatic test reports disabled=%s", disabled)

    def __repr__(self) -> str:
        return f"Reporter(session_id={self._router.session_id!r})"
