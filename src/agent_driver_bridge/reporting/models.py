"""Report entry models.

Classes
-------
- DriverCommandsFilter  — which driver-command reports to suppress
- CommandReport         — one executed driver command
- StepReport            — a user-defined step
- TestReport            — a test outcome
- ReportingOptions      — mutable reporting switches for one session
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class DriverCommandsFilter(str, Enum):
    """Driver-command reports to suppress."""

    NONE = "none"
    PASSING = "passing"
    FAILING = "failing"
    ALL = "all"

    def suppresses(self, passed: bool) -> bool:
        """Return True if a command with outcome ``passed`` is filtered out."""
        if self is DriverCommandsFilter.ALL:
            return True
        if self is DriverCommandsFilter.PASSING:
            return passed
        if self is DriverCommandsFilter.FAILING:
            return not passed
        return False


class CommandReport(BaseModel):
    """A driver command as it will be reported to the Agent.

    Parameters
    ----------
    command:
        Selenium command name.
    parameters:
        Parameters the command was sent with.
    result:
        The ``value`` returned by the Agent.
    passed:
        Whether the Agent reported success.
    timestamp:
        When the command completed (UTC).
    """

    command: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    result: Any = None
    passed: bool = True
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON document the Agent's batch endpoint accepts."""
        return {
            "commandName": self.command,
            "commandParameters": self.parameters,
            "result": self.result,
            "passed": self.passed,
            "timestamp": self.timestamp.isoformat(),
        }


class StepReport(BaseModel):
    """A step reported explicitly by test code."""

    description: str
    message: str = ""
    passed: bool = True

    def to_payload(self) -> dict[str, Any]:
        return {"description": self.description, "message": self.message, "passed": self.passed}


class TestReport(BaseModel):
    """The outcome of a test, reported explicitly or automatically."""

    name: str
    passed: bool = True
    message: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "passed": self.passed, "message": self.message}


@dataclass
class ReportingOptions:
    """Reporting switches owned by one router.

    Attributes
    ----------
    disabled:
        Nothing is reported at all.
    command_filter:
        Driver-command reports to suppress.
    auto_test_reports:
        Report a test outcome automatically when the stash is flushed.
    test_name:
        Name used for the automatic test report.
    """

    disabled: bool = False
    command_filter: DriverCommandsFilter = DriverCommandsFilter.NONE
    auto_test_reports: bool = True
    test_name: str = "Unnamed Test"
