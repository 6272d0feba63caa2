"""Explicitly shared state for one logical test run.

``BridgeContext`` owns the settings and the ``AgentSessionProvider`` that
drivers share, replacing a process-wide singleton: drivers created from
the same context share one Agent session per (endpoint, token).

Classes
-------
- BridgeContext  — settings + provider, usable as a context manager
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from agent_driver_bridge.agent.provider import AgentSessionProvider
from agent_driver_bridge.config import BridgeSettings

if TYPE_CHECKING:
    from agent_driver_bridge.driver import BridgedDriver


class BridgeContext:
    """Settings and session provider shared by a group of drivers.

    Parameters
    ----------
    settings:
        Defaults for every driver.  Read from the environment when omitted.
    transport:
        Optional ``httpx`` transport for all Agent traffic.
    provider:
        A pre-built provider to share instead of creating one.
    """

    def __init__(
        self,
        settings: BridgeSettings | None = None,
        transport: httpx.BaseTransport | None = None,
        provider: AgentSessionProvider | None = None,
    ) -> None:
        if provider is not None:
            self.provider = provider
            self.settings = settings if settings is not None else provider.settings
        else:
            self.settings = settings if settings is not None else BridgeSettings.from_env()
            self.provider = AgentSessionProvider(self.settings, transport=transport)

    def driver(self, **kwargs: Any) -> BridgedDriver:
        """Create a ``BridgedDriver`` bound to this context."""
        from agent_driver_bridge.driver import BridgedDriver

        return BridgedDriver(context=self, **kwargs)

    def close(self) -> None:
        """Close the provider's Agent connections."""
        self.provider.close()

    def __enter__(self) -> BridgeContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"BridgeContext(agent_url={self.settings.agent_url!r})"
