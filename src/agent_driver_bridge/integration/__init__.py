"""Test-framework integration guard."""
from __future__ import annotations

from agent_driver_bridge.integration.guard import FrameworkGuard, FrameworkKind

__all__ = ["FrameworkGuard", "FrameworkKind"]
