"""Exactly-once session teardown."""
from __future__ import annotations

from agent_driver_bridge.lifecycle.shutdown import (
    ShutdownCoordinator,
    ShutdownHandle,
    ShutdownState,
)

__all__ = ["ShutdownCoordinator", "ShutdownHandle", "ShutdownState"]
