"""Report models, the reporting stash and the ``Reporter`` handle."""
from __future__ import annotations

from agent_driver_bridge.reporting.models import (
    CommandReport,
    DriverCommandsFilter,
    ReportingOptions,
    StepReport,
    TestReport,
)
from agent_driver_bridge.reporting.reporter import Reporter
from agent_driver_bridge.reporting.stash import ReportingStash

__all__ = [
    "CommandReport",
    "DriverCommandsFilter",
    "Reporter",
    "ReportingOptions",
    "ReportingStash",
    "StepReport",
    "TestReport",
]
