"""Agent session provider.

``AgentSessionProvider`` negotiates sessions with the Agent and caches the
resulting descriptors so that one logical run shares a single remote
session per (endpoint, token) pair.  The provider is an ordinary object:
whoever composes the drivers (normally ``BridgeContext``) owns it and
passes it around explicitly.

Each acquisition counts one sharer of the returned descriptor.  A
descriptor is forgotten only when its last sharer releases it.

Classes
-------
- AgentSessionProvider  — acquire / current / release over an AgentClient
"""
from __future__ import annotations

import logging
import threading
from typing import Any

import httpx

from agent_driver_bridge.agent.client import AgentClient
from agent_driver_bridge.agent.models import RemoteSessionDescriptor, ReportSettings
from agent_driver_bridge.config import BridgeSettings
from agent_driver_bridge.exceptions import InvalidTokenError, SessionNotAcquiredError

logger = logging.getLogger(__name__)


def _capabilities_from(options: object) -> dict[str, Any]:
    """Return the desired capabilities carried by ``options``.

    ``options`` may be a Selenium options object, a plain capabilities
    mapping, or None.
    """
    if options is None:
        return {}
    if isinstance(options, dict):
        return dict(options)
    to_capabilities = getattr(options, "to_capabilities", None)
    if callable(to_capabilities):
        return dict(to_capabilities())
    raise TypeError(
        f"Expected Selenium options or a capabilities dict, got {type(options).__name__}."
    )


class AgentSessionProvider:
    """Negotiate and share Agent sessions.

    Parameters
    ----------
    settings:
        Defaults for the Agent address, token and reporting.  Read from the
        environment when omitted.
    transport:
        Optional ``httpx`` transport handed to every ``AgentClient``.
    """

    def __init__(
        self,
        settings: BridgeSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings if settings is not None else BridgeSettings.from_env()
        self._transport = transport
        self._lock = threading.Lock()
        self._sessions: dict[tuple[str, str], RemoteSessionDescriptor] = {}
        self._sharers: dict[tuple[str, str], int] = {}
        self._clients: dict[tuple[str, str], AgentClient] = {}
        self._current: RemoteSessionDescriptor | None = None

    # ------------------------------------------------------------------
    # Acquisition
    # ------------------------------------------------------------------

    def acquire(
        self,
        remote_address: str | None = None,
        token: str | None = None,
        options: object = None,
        report_settings: ReportSettings | None = None,
        disable_reports: bool = False,
    ) -> RemoteSessionDescriptor:
        """Return the session for the given Agent, starting it if needed.

        Called without an address or token once a session exists, the
        current session is returned unchanged.  Every call that returns a
        descriptor counts one sharer of it; pair it with ``release``.

        Parameters
        ----------
        remote_address:
            Agent API address.  Defaults to ``settings.agent_url``.
        token:
            Development token.  Defaults to ``settings.token``.
        options:
            Selenium options (or a capabilities dict) to request.
        report_settings:
            Reporting names.  Defaults to the settings' values.
        disable_reports:
            Disable reporting for this session.

        Returns
        -------
        RemoteSessionDescriptor

        Raises
        ------
        InvalidTokenError
            If no token is available or the Agent rejects it.
        AgentConnectionError
            If the Agent cannot be reached.
        SessionNegotiationError
            If the Agent refuses the session.
        """
        with self._lock:
            if remote_address is None and token is None and self._current is not None:
                self._share(self._current)
                return self._current

            agent_url = (remote_address or self.settings.agent_url).rstrip("/")
            resolved_token = token or self.settings.token
            if not resolved_token:
                raise InvalidTokenError(
                    "No development token was provided. Pass token=... or set "
                    "AGENT_BRIDGE_TOKEN."
                )

            key = (agent_url, resolved_token)
            existing = self._sessions.get(key)
            if existing is not None:
                logger.debug("AgentSessionProvider: reusing session %r", existing.session_id)
                self._sharers[key] += 1
                return existing

            client = self._client_for_key(key)
            descriptor = client.start_session(
                _capabilities_from(options),
                report_settings or self.settings.report_settings(),
                disable_reports or self.settings.disable_reports,
            )
            self._sessions[key] = descriptor
            self._sharers[key] = 1
            if self._current is None:
                self._current = descriptor
            return descriptor

    def current(self) -> RemoteSessionDescriptor:
        """Return the session acquired first in this provider.

        Raises
        ------
        SessionNotAcquiredError
            If nothing has been acquired yet (or it was released).
        """
        if self._current is None:
            raise SessionNotAcquiredError("No Agent session has been acquired yet.")
        return self._current

    def release(self, descriptor: RemoteSessionDescriptor) -> bool:
        """Drop one sharer of ``descriptor``.

        When the last sharer is gone the descriptor is forgotten, and the
        next acquisition for the same Agent and token starts a new session.

        Returns
        -------
        bool
            True if no sharer is left, i.e. the caller should end the
            remote session.
        """
        with self._lock:
            key = self._key_of(descriptor)
            if key is None:
                return True
            self._sharers[key] -= 1
            remaining = self._sharers[key]
            if remaining > 0:
                logger.debug(
                    "AgentSessionProvider: session %r still has %d sharer(s)",
                    descriptor.session_id,
                    remaining,
                )
                return False
            del self._sessions[key]
            del self._sharers[key]
            if self._current is not None and self._current.session_id == descriptor.session_id:
                self._current = next(iter(self._sessions.values()), None)
        logger.debug("AgentSessionProvider: released session %r", descriptor.session_id)
        return True

    def _share(self, descriptor: RemoteSessionDescriptor) -> None:
        key = self._key_of(descriptor)
        if key is not None:
            self._sharers[key] += 1

    def _key_of(self, descriptor: RemoteSessionDescriptor) -> tuple[str, str] | None:
        for key, cached in self._sessions.items():
            if cached.session_id == descriptor.session_id:
                return key
        return None

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    def client_for(self, descriptor: RemoteSessionDescriptor) -> AgentClient:
        """Return the ``AgentClient`` that negotiated ``descriptor``.

        Raises
        ------
        SessionNotAcquiredError
            If ``descriptor`` was not issued through this provider.
        """
        for key, cached in self._sessions.items():
            if cached.session_id == descriptor.session_id:
                return self._clients[key]
        raise SessionNotAcquiredError(
            f"Session {descriptor.session_id!r} was not acquired through this provider."
        )

    def _client_for_key(self, key: tuple[str, str]) -> AgentClient:
        client = self._clients.get(key)
        if client is None:
            agent_url, token = key
            client = AgentClient(
                agent_url,
                token,
                timeout=self.settings.request_timeout,
                transport=self._transport,
            )
            self._clients[key] = client
        return client

    @property
    def transport(self) -> httpx.BaseTransport | None:
        """The ``httpx`` transport shared with routers, if one was injected."""
        return self._transport

    def close(self) -> None:
        """Close every Agent client opened by this provider."""
        with self._lock:
            for client in self._clients.values():
                client.close()
            self._clients.clear()

    def __repr__(self) -> str:
        return f"AgentSessionProvider(sessions={len(self._sessions)})"
