"""Agent API client, session models and the session provider."""
from __future__ import annotations

from agent_driver_bridge.agent.client import AgentClient
from agent_driver_bridge.agent.models import (
    Dialect,
    RemoteSessionDescriptor,
    ReportSettings,
    ReportType,
)
from agent_driver_bridge.agent.provider import AgentSessionProvider

__all__ = [
    "AgentClient",
    "AgentSessionProvider",
    "Dialect",
    "RemoteSessionDescriptor",
    "ReportSettings",
    "ReportType",
]
