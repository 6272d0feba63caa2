"""Dialect dispatch tables and parameter encoding."""
from __future__ import annotations

from agent_driver_bridge.protocol.adapter import ProtocolModeAdapter, is_legacy_mode
from agent_driver_bridge.protocol.commands import LEGACY_COMMANDS, W3C_COMMANDS, CommandInfo

__all__ = [
    "CommandInfo",
    "LEGACY_COMMANDS",
    "ProtocolModeAdapter",
    "W3C_COMMANDS",
    "is_legacy_mode",
]
