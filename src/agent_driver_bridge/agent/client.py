"""HTTP client for the Agent API.

``AgentClient`` wraps an ``httpx.Client`` bound to the Agent base address
and the development token.  It covers the Agent endpoints that are not
plain WebDriver commands: status, session negotiation, report delivery
and add-on execution.  WebDriver commands go through
``agent_driver_bridge.routing.router.CommandRouter`` instead.

Classes
-------
- AgentClient  — thin, synchronous Agent API client
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from agent_driver_bridge.agent.models import (
    Dialect,
    RemoteSessionDescriptor,
    ReportSettings,
)
from agent_driver_bridge.exceptions import (
    AddonExecutionError,
    AgentConnectionError,
    InvalidTokenError,
    ReportingError,
    SessionNegotiationError,
)

logger = logging.getLogger(__name__)

# Agent API paths
STATUS_PATH = "/api/status"
SESSION_PATH = "/api/development/session"
REPORT_BATCH_PATH = "/api/development/report/batch"
REPORT_STEP_PATH = "/api/development/report/step"
REPORT_TEST_PATH = "/api/development/report/test"
ADDON_EXECUTION_PATH = "/api/addons/executions"

SDK_LANGUAGE = "Python"


def _error_message(response: httpx.Response) -> str:
    """Extract the Agent's error message from ``response``, if it sent one."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


class AgentClient:
    """Synchronous client for one Agent address and token.

    Parameters
    ----------
    agent_url:
        Base address of the Agent API, e.g. ``"http://localhost:8585"``.
    token:
        Development token placed in the ``Authorization`` header.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional ``httpx`` transport; tests pass an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        agent_url: str,
        token: str | None,
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.agent_url = agent_url.rstrip("/")
        self.token = token
        headers = {"Authorization": token} if token else {}
        self._client = httpx.Client(
            base_url=self.agent_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_status(self) -> dict[str, Any]:
        """Return the Agent status document (includes the Agent version tag).

        Raises
        ------
        AgentConnectionError
            If the Agent is unreachable or answers with an error.
        """
        try:
            response = self._client.get(STATUS_PATH)
        except httpx.TransportError as exc:
            raise AgentConnectionError(self.agent_url, str(exc)) from exc
        if response.is_error:
            raise AgentConnectionError(self.agent_url, _error_message(response))
        return dict(response.json())

    # ------------------------------------------------------------------
    # Session negotiation
    # ------------------------------------------------------------------

    def start_session(
        self,
        capabilities: dict[str, Any],
        report_settings: ReportSettings,
        disable_reports: bool = False,
    ) -> RemoteSessionDescriptor:
        """Ask the Agent to start a browser session.

        Parameters
        ----------
        capabilities:
            Desired capabilities for the browser.
        report_settings:
            Project/job names and report destination.
        disable_reports:
            Ask the Agent not to create a report for this session.

        Returns
        -------
        RemoteSessionDescriptor
            The session the Agent started.

        Raises
        ------
        AgentConnectionError
            If the Agent cannot be reached.
        InvalidTokenError
            If the Agent rejects the development token.
        SessionNegotiationError
            If the Agent refuses the requested capabilities.
        """
        from agent_driver_bridge import __version__

        body = {
            "capabilities": capabilities,
            "projectName": report_settings.project_name,
            "jobName": report_settings.job_name,
            "reportType": report_settings.report_type.value,
            "disableReports": disable_reports,
            "sdkVersion": __version__,
            "language": SDK_LANGUAGE,
        }
        logger.debug("AgentClient: requesting session from %s", self.agent_url)
        try:
            response = self._client.post(SESSION_PATH, json=body)
        except httpx.TransportError as exc:
            raise AgentConnectionError(self.agent_url, str(exc)) from exc

        if response.status_code in (401, 403):
            raise InvalidTokenError(
                f"The Agent rejected the development token: {_error_message(response)}",
                status_code=response.status_code,
            )
        if response.is_error:
            raise SessionNegotiationError(
                f"The Agent failed to start a session: {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SessionNegotiationError(
                "The Agent returned a malformed session response.",
                status_code=response.status_code,
            ) from exc
        session_id = payload.get("sessionId") if isinstance(payload, dict) else None
        if not session_id:
            raise SessionNegotiationError(
                "The Agent response did not contain a session ID.",
                status_code=response.status_code,
            )

        descriptor = RemoteSessionDescriptor(
            session_id=str(session_id),
            capabilities=payload.get("capabilities") or capabilities,
            remote_address=(payload.get("serverAddress") or self.agent_url).rstrip("/"),
            dialect=Dialect.parse(payload.get("dialect")),
            agent_url=self.agent_url,
        )
        logger.info(
            "AgentClient: session %r started (%s dialect)",
            descriptor.session_id,
            descriptor.dialect.name,
        )
        return descriptor

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def report_batch(self, entries: list[dict[str, Any]]) -> None:
        """Deliver a batch of command reports."""
        self._post_report(REPORT_BATCH_PATH, entries)

    def report_step(self, entry: dict[str, Any]) -> None:
        """Deliver a single step report."""
        self._post_report(REPORT_STEP_PATH, entry)

    def report_test(self, entry: dict[str, Any]) -> None:
        """Deliver a single test report."""
        self._post_report(REPORT_TEST_PATH, entry)

    def _post_report(self, path: str, payload: object) -> None:
        try:
            response = self._client.post(path, json=payload)
        except httpx.TransportError as exc:
            raise ReportingError(f"Failed to deliver report to {path}: {exc}") from exc
        if response.is_error:
            raise ReportingError(
                f"The Agent rejected the report sent to {path}: {_error_message(response)}"
            )

    # ------------------------------------------------------------------
    # Add-ons
    # ------------------------------------------------------------------

    def execute_addon(self, payload: dict[str, Any], timeout: float | None = None) -> dict[str, Any]:
        """Run an add-on action on the Agent and return its result document.

        ``timeout`` overrides the client timeout for this call only.
        """
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            response = self._client.post(ADDON_EXECUTION_PATH, json=payload, **kwargs)
        except httpx.TransportError as exc:
            raise AgentConnectionError(self.agent_url, str(exc)) from exc
        if response.is_error:
            raise AddonExecutionError(
                f"The Agent failed to execute the action: {_error_message(response)}"
            )
        return dict(response.json())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def __repr__(self) -> str:
        return f"AgentClient(agent_url={self.agent_url!r})"
