"""Command routing to the Agent."""
from __future__ import annotations

from agent_driver_bridge.routing.envelope import CommandEnvelope
from agent_driver_bridge.routing.router import CommandRouter

__all__ = ["CommandEnvelope", "CommandRouter"]
