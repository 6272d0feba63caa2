"""Unit tests for agent_driver_bridge.cli.main.

Uses Click's test runner (CliRunner); the Agent client and the driver are
patched so no Agent or browser is required.
"""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from selenium.webdriver import ChromeOptions, FirefoxOptions

from agent_driver_bridge.agent.models import Dialect, RemoteSessionDescriptor
from agent_driver_bridge.cli.main import _make_options, cli
from agent_driver_bridge.exceptions import AgentConnectionError, InvalidTokenError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def descriptor() -> RemoteSessionDescriptor:
    return RemoteSessionDescriptor(
        session_id="abcdef123456",
        capabilities={"browserName": "firefox"},
        remote_address="http://localhost:8585/wd/hub",
        dialect=Dialect.W3C,
        agent_url="http://localhost:8585",
    )


# ---------------------------------------------------------------------------
# _make_options
# ---------------------------------------------------------------------------


class TestMakeOptions:
    def test_chrome(self) -> None:
        assert isinstance(_make_options("chrome", False), ChromeOptions)

    def test_firefox_headless(self) -> None:
        options = _make_options("firefox", True)
        assert isinstance(options, FirefoxOptions)
        assert "-headless" in options.arguments

    def test_chrome_headless(self) -> None:
        assert "--headless=new" in _make_options("chrome", True).arguments


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersionCommand:
    def test_prints_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


class TestStatusCommand:
    def test_agent_running(self, runner: CliRunner) -> None:
        with patch(
            "agent_driver_bridge.agent.client.AgentClient.get_status",
            return_value={"tag": "3.5.0"},
        ):
            result = runner.invoke(cli, ["status", "--agent-url", "http://agent:8585"])
        assert result.exit_code == 0
        assert "Agent is running" in result.output
        assert "3.5.0" in result.output

    def test_agent_unreachable(self, runner: CliRunner) -> None:
        with patch(
            "agent_driver_bridge.agent.client.AgentClient.get_status",
            side_effect=AgentConnectionError("http://agent:8585", "connection refused"),
        ):
            result = runner.invoke(cli, ["status", "--agent-url", "http://agent:8585"])
        assert result.exit_code == 1
        assert "connection refused" in result.output


# ---------------------------------------------------------------------------
# session
# ---------------------------------------------------------------------------


class TestSessionCommand:
    def test_prints_session_table(
        self, runner: CliRunner, descriptor: RemoteSessionDescriptor
    ) -> None:
        bridged = MagicMock()
        bridged.descriptor = descriptor
        with patch("agent_driver_bridge.driver.BridgedDriver") as driver_cls:
            driver_cls.return_value.__enter__.return_value = bridged
            result = runner.invoke(
                cli, ["session", "--token", "tok", "--browser", "firefox", "--disable-reports"]
            )
        assert result.exit_code == 0
        assert "abcdef123456" in result.output
        assert "Session closed." in result.output
        kwargs = driver_cls.call_args.kwargs
        assert kwargs["token"] == "tok"
        assert kwargs["disable_reports"] is True
        assert isinstance(kwargs["options"], FirefoxOptions)

    def test_bridge_error_exits_non_zero(self, runner: CliRunner) -> None:
        with patch(
            "agent_driver_bridge.driver.BridgedDriver",
            side_effect=InvalidTokenError("No development token was provided."),
        ):
            result = runner.invoke(cli, ["session"])
        assert result.exit_code == 1
        assert "No development token" in result.output

    def test_rejects_unknown_browser(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["session", "--browser", "opera"])
        assert result.exit_code != 0
