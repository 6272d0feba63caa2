"""Unit tests for agent_driver_bridge.reporting."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from agent_driver_bridge.reporting.models import (
    CommandReport,
    DriverCommandsFilter,
    ReportingOptions,
    StepReport,
)
from agent_driver_bridge.reporting.reporter import Reporter
from agent_driver_bridge.reporting.stash import ReportingStash


# ---------------------------------------------------------------------------
# DriverCommandsFilter
# ---------------------------------------------------------------------------


class TestDriverCommandsFilter:
    @pytest.mark.parametrize(
        ("commands_filter", "passed", "expected"),
        [
            (DriverCommandsFilter.NONE, True, False),
            (DriverCommandsFilter.NONE, False, False),
            (DriverCommandsFilter.PASSING, True, True),
            (DriverCommandsFilter.PASSING, False, False),
            (DriverCommandsFilter.FAILING, True, False),
            (DriverCommandsFilter.FAILING, False, True),
            (DriverCommandsFilter.ALL, True, True),
            (DriverCommandsFilter.ALL, False, True),
        ],
    )
    def test_suppresses(
        self, commands_filter: DriverCommandsFilter, passed: bool, expected: bool
    ) -> None:
        assert commands_filter.suppresses(passed) is expected


# ---------------------------------------------------------------------------
# Report models
# ---------------------------------------------------------------------------


class TestReportModels:
    def test_command_report_payload(self) -> None:
        payload = CommandReport(command="get", parameters={"url": "x"}, passed=False).to_payload()
        assert payload["commandName"] == "get"
        assert payload["commandParameters"] == {"url": "x"}
        assert payload["passed"] is False
        assert "timestamp" in payload

    def test_step_report_payload(self) -> None:
        payload = StepReport(description="Login", message="ok").to_payload()
        assert payload == {"description": "Login", "message": "ok", "passed": True}

    def test_reporting_options_defaults(self) -> None:
        options = ReportingOptions()
        assert options.disabled is False
        assert options.command_filter is DriverCommandsFilter.NONE
        assert options.auto_test_reports is True


# ---------------------------------------------------------------------------
# ReportingStash
# ---------------------------------------------------------------------------


class TestReportingStash:
    def test_preserves_order(self) -> None:
        stash = ReportingStash()
        stash.append(CommandReport(command="a"))
        stash.append(CommandReport(command="b"))
        assert [entry.command for entry in stash] == ["a", "b"]

    def test_drain_returns_and_clears(self) -> None:
        stash = ReportingStash()
        stash.append(CommandReport(command="a"))
        drained = stash.drain()
        assert [entry.command for entry in drained] == ["a"]
        assert len(stash) == 0
        assert stash.drain() == []

    def test_entries_is_a_snapshot(self) -> None:
        stash = ReportingStash()
        stash.append(CommandReport(command="a"))
        stash.entries.clear()
        assert len(stash) == 1


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------


class TestReporter:
    def test_step_forwarded_to_router(self) -> None:
        router = MagicMock()
        Reporter(router).step("Opened page", message="fine", passed=True)
        step = router.send_step.call_args.args[0]
        assert step.description == "Opened page"
        assert step.passed is True

    def test_test_forwarded_to_router(self) -> None:
        router = MagicMock()
        Reporter(router).test("Login test", passed=False, message="boom")
        test = router.send_test.call_args.args[0]
        assert (test.name, test.passed, test.message) == ("Login test", False, "boom")

    def test_disable_command_reports(self) -> None:
        router = MagicMock()
        router.reporting = ReportingOptions()
        Reporter(router).disable_command_reports(DriverCommandsFilter.ALL)
        assert router.reporting.command_filter is DriverCommandsFilter.ALL

    def test_disable_auto_test_reports(self) -> None:
        router = MagicMock()
        router.reporting = ReportingOptions()
        reporter = Reporter(router)
        reporter.disable_auto_test_reports(True)
        assert router.reporting.auto_test_reports is False
        reporter.disable_auto_test_reports(False)
        assert router.reporting.auto_test_reports is True
