"""Exception taxonomy for agent-driver-bridge.

Every error raised by this package derives from ``BridgeError`` except
``NoSuchElementError``, which extends Selenium's own
``NoSuchElementException`` so existing ``except`` clauses keep working.

Classes
-------
- BridgeError               — package root
- AgentConnectionError      — the Agent could not be reached
- SessionNegotiationError   — the Agent refused to start a session
- InvalidTokenError         — missing or rejected development token
- SessionNotAcquiredError   — ``current()`` called before ``acquire()``
- TransportError            — per-command network failure
- UnknownCommandError       — command missing from the dispatch table
- SessionNotRunningError    — command sent after the session was stopped
- ReportingError            — a report could not be delivered
- AddonExecutionError       — an add-on action failed on the Agent
- IntegrationMissingError   — framework plugin required but not installed
- NoSuchElementError        — locator could not be resolved
"""
from __future__ import annotations

from selenium.common.exceptions import NoSuchElementException


class BridgeError(Exception):
    """Base class for all agent-driver-bridge errors."""


class AgentConnectionError(BridgeError, ConnectionError):
    """Raised when the Agent does not answer at the configured address."""

    def __init__(self, agent_url: str, reason: str = "") -> None:
        self.agent_url = agent_url
        message = f"Could not connect to the Agent at {agent_url!r}."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class SessionNegotiationError(BridgeError):
    """Raised when the Agent rejects the requested session.

    Parameters
    ----------
    message:
        Human-readable reason.
    status_code:
        HTTP status returned by the Agent, when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class InvalidTokenError(SessionNegotiationError):
    """Raised when no token is configured or the Agent rejects it."""


class SessionNotAcquiredError(BridgeError):
    """Raised when the current session is requested before any acquisition."""


class TransportError(BridgeError):
    """Raised when a command cannot be delivered to the Agent."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        super().__init__(f"Failed to send {command!r} to the Agent: {reason}")


class UnknownCommandError(BridgeError, KeyError):
    """Raised when a command has no entry in the active dispatch table."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unrecognised command {command!r}.")

    def __str__(self) -> str:
        return str(self.args[0])


class SessionNotRunningError(BridgeError):
    """Raised when a command is routed for a session that has been stopped."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} is not running.")


class ReportingError(BridgeError):
    """Raised when the Agent refuses or fails to receive a report."""


class AddonExecutionError(BridgeError):
    """Raised when the Agent fails to run an add-on action."""


class IntegrationMissingError(BridgeError):
    """Raised when a detected test framework lacks its reporting plugin."""


class NoSuchElementError(NoSuchElementException):
    """Raised when a locator cannot be resolved to an element."""
