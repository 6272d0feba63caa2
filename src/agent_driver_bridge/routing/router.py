"""Command router: the transport behind every bridged driver.

``CommandRouter`` is handed to Selenium's ``WebDriver`` as its
``command_executor``.  Selenium calls ``execute(command, params)`` for every
operation; the router absorbs the implicit new-session request, encodes
parameters for the negotiated dialect, forwards the command to the Agent,
buffers a command report and returns the response in the shape Selenium's
own ``RemoteConnection`` returns, so Selenium's error handling behaves
exactly as it would against a direct session.

Classes
-------
- CommandRouter  — Selenium command executor bound to one Agent session
"""
from __future__ import annotations

import logging
import string
from collections.abc import Mapping
from typing import Any

import httpx
from selenium.webdriver.remote.command import Command
from selenium.webdriver.remote.errorhandler import ErrorCode

from agent_driver_bridge.agent.client import AgentClient
from agent_driver_bridge.agent.models import RemoteSessionDescriptor
from agent_driver_bridge.exceptions import (
    SessionNotRunningError,
    TransportError,
    UnknownCommandError,
)
from agent_driver_bridge.protocol.adapter import ProtocolModeAdapter
from agent_driver_bridge.protocol.commands import CommandInfo
from agent_driver_bridge.reporting.models import (
    CommandReport,
    ReportingOptions,
    StepReport,
    TestReport,
)
from agent_driver_bridge.reporting.stash import ReportingStash
from agent_driver_bridge.routing.envelope import CommandEnvelope

logger = logging.getLogger(__name__)

# Commands still routed while the session is being torn down.
TEARDOWN_COMMANDS = frozenset({Command.QUIT})

# Commands that never produce a command report.
UNREPORTED_COMMANDS = frozenset({Command.NEW_SESSION, Command.QUIT})


def _to_selenium_response(response: httpx.Response) -> dict[str, Any]:
    """Convert an HTTP response into Selenium's response dictionary.

    Error statuses carry the raw body as ``value`` so that Selenium's
    ``ErrorHandler`` decodes the error the same way it does for responses
    of its own ``RemoteConnection``.
    """
    status_code = response.status_code
    body = response.text.strip()
    if 399 < status_code <= 500:
        return {"status": status_code, "value": body}
    try:
        data = response.json()
    except ValueError:
        status = ErrorCode.SUCCESS if 199 < status_code < 300 else ErrorCode.UNKNOWN_ERROR[0]
        return {"status": status, "value": body}
    if not isinstance(data, dict):
        return {"status": ErrorCode.SUCCESS, "value": data}
    data.setdefault("value", None)
    return data


def _succeeded(response: Mapping[str, Any]) -> bool:
    """Return True if ``response`` reports a successful command."""
    status = response.get("status")
    if status not in (None, ErrorCode.SUCCESS):
        return False
    value = response.get("value")
    return not (isinstance(value, dict) and "error" in value)


class CommandRouter:
    """Selenium command executor that talks to the Agent.

    Parameters
    ----------
    descriptor:
        The Agent session every command is addressed to.
    agent:
        Client used to deliver reports.
    adapter:
        Dialect encoding for ``descriptor``.
    commands:
        Dispatch table.  Defaults to ``adapter.command_table()``.
    reporting:
        Reporting switches.  A fresh ``ReportingOptions`` when omitted.
    timeout:
        Per-command timeout in seconds.
    transport:
        Optional ``httpx`` transport; tests pass an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        descriptor: RemoteSessionDescriptor,
        agent: AgentClient,
        adapter: ProtocolModeAdapter,
        commands: Mapping[str, CommandInfo] | None = None,
        reporting: ReportingOptions | None = None,
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.agent = agent
        self.reporting = reporting or ReportingOptions()
        self.stash = ReportingStash()
        self._adapter = adapter
        self._commands = commands if commands is not None else adapter.command_table()
        headers = {"Authorization": agent.token} if agent.token else {}
        self._client = httpx.Client(
            base_url=descriptor.remote_address,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._accepting = True
        self._closed = False

    @property
    def session_id(self) -> str:
        """Identifier of the bridged session."""
        return self.descriptor.session_id

    # ------------------------------------------------------------------
    # Selenium command-executor interface
    # ------------------------------------------------------------------

    def execute(self, command: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Route ``command`` to the Agent and return Selenium's response dict.

        Parameters
        ----------
        command:
            Selenium command name.
        params:
            Command parameters as produced by ``WebDriver.execute``.

        Returns
        -------
        dict[str, Any]
            ``{"status"?, "sessionId"?, "value"}``.  Agent-reported failures
            are returned, not raised.

        Raises
        ------
        SessionNotRunningError
            If the session is stopping or stopped and ``command`` is not
            part of teardown.
        UnknownCommandError
            If ``command`` is not in the dispatch table.
        TransportError
            If the Agent cannot be reached.
        """
        if command == Command.NEW_SESSION:
            # The Agent already created the session; absorb Selenium's attempt.
            logger.debug("CommandRouter: absorbed new-session for %r", self.session_id)
            return {"status": ErrorCode.SUCCESS, "sessionId": self.session_id, "value": {}}

        if self._closed or (not self._accepting and command not in TEARDOWN_COMMANDS):
            raise SessionNotRunningError(self.session_id)

        envelope = CommandEnvelope(
            command=command,
            session_id=self.session_id,
            parameters=self._adapter.encode(command, params or {}),
        )
        response = self._send(envelope)
        self._record(envelope, response)
        return response

    def close(self) -> None:
        """Release the HTTP connection pool.  Called by ``WebDriver.quit``."""
        if not self._closed:
            self._closed = True
            self._accepting = False
            self._client.close()
            logger.debug("CommandRouter: closed transport for %r", self.session_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def begin_teardown(self) -> None:
        """Refuse every command except those that end the session."""
        self._accepting = False

    @property
    def closed(self) -> bool:
        """True once the transport has been closed."""
        return self._closed

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def flush_stash(self) -> int:
        """Deliver and clear the buffered command reports.

        When automatic test reports are enabled and anything was buffered,
        a test report is sent after the batch; it passes only if every
        buffered command passed.

        Returns
        -------
        int
            Number of command reports drained from the stash.

        Raises
        ------
        ReportingError
            If the Agent does not accept the reports.
        """
        entries = self.stash.drain()
        if not entries or self.reporting.disabled:
            return len(entries)
        logger.debug("CommandRouter: flushing %d stashed reports", len(entries))
        self.agent.report_batch([entry.to_payload() for entry in entries])
        if self.reporting.auto_test_reports:
            self.send_test(
                TestReport(
                    name=self.reporting.test_name,
                    passed=all(entry.passed for entry in entries),
                )
            )
        return len(entries)

    def send_step(self, step: StepReport) -> None:
        """Deliver a step report unless reporting is disabled."""
        if self.reporting.disabled:
            logger.debug("CommandRouter: reporting disabled, dropping step %r", step.description)
            return
        self.agent.report_step(step.to_payload())

    def send_test(self, test: TestReport) -> None:
        """Deliver a test report unless reporting is disabled."""
        if self.reporting.disabled:
            logger.debug("CommandRouter: reporting disabled, dropping test %r", test.name)
            return
        self.agent.report_test(test.to_payload())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _send(self, envelope: CommandEnvelope) -> dict[str, Any]:
        info = self._commands.get(envelope.command)
        if info is None:
            raise UnknownCommandError(envelope.command)
        path = string.Template(info.path).substitute(envelope.path_values())
        logger.debug("CommandRouter: forwarding %r as %s %s", envelope.command, info.method, path)
        try:
            if info.method == "POST":
                response = self._client.post(path, json=envelope.body())
            else:
                response = self._client.request(info.method, path)
        except httpx.TransportError as exc:
            raise TransportError(envelope.command, str(exc)) from exc
        return _to_selenium_response(response)

    def _record(self, envelope: CommandEnvelope, response: Mapping[str, Any]) -> None:
        if self.reporting.disabled or envelope.command in UNREPORTED_COMMANDS:
            return
        passed = _succeeded(response)
        if self.reporting.command_filter.suppresses(passed):
            return
        self.stash.append(
            CommandReport(
                command=envelope.command,
                parameters=envelope.body(),
                result=response.get("value"),
                passed=passed,
            )
        )

    def __repr__(self) -> str:
        return (
            f"CommandRouter(session_id={self.session_id!r}, "
            f"dialect={self.descriptor.dialect.name}, stashed={len(self.stash)})"
        )
