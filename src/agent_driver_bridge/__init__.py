"""agent-driver-bridge — Selenium drivers whose sessions live in an Agent.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import agent_driver_bridge
>>> agent_driver_bridge.__version__
'0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

# Errors
from agent_driver_bridge.exceptions import (
    AddonExecutionError,
    AgentConnectionError,
    BridgeError,
    IntegrationMissingError,
    InvalidTokenError,
    NoSuchElementError,
    ReportingError,
    SessionNegotiationError,
    SessionNotAcquiredError,
    SessionNotRunningError,
    TransportError,
    UnknownCommandError,
)

# Agent
from agent_driver_bridge.agent.models import (
    Dialect,
    RemoteSessionDescriptor,
    ReportSettings,
    ReportType,
)
from agent_driver_bridge.agent.client import AgentClient
from agent_driver_bridge.agent.provider import AgentSessionProvider
from agent_driver_bridge.config import BridgeSettings

# Routing and reporting
from agent_driver_bridge.protocol.adapter import ProtocolModeAdapter, is_legacy_mode
from agent_driver_bridge.routing.envelope import CommandEnvelope
from agent_driver_bridge.routing.router import CommandRouter
from agent_driver_bridge.reporting.models import DriverCommandsFilter
from agent_driver_bridge.reporting.reporter import Reporter
from agent_driver_bridge.reporting.stash import ReportingStash

# Lifecycle and integration
from agent_driver_bridge.lifecycle.shutdown import (
    ShutdownCoordinator,
    ShutdownHandle,
    ShutdownState,
)
from agent_driver_bridge.integration.guard import FrameworkGuard, FrameworkKind

# Drivers
from agent_driver_bridge.addons import AddonHelper
from agent_driver_bridge.context import BridgeContext
from agent_driver_bridge.driver import (
    BridgedDriver,
    BridgedSession,
    ChromeDriver,
    EdgeDriver,
    FirefoxDriver,
)

__all__ = [
    "__version__",
    # Errors
    "AddonExecutionError",
    "AgentConnectionError",
    "BridgeError",
    "IntegrationMissingError",
    "InvalidTokenError",
    "NoSuchElementError",
    "ReportingError",
    "SessionNegotiationError",
    "SessionNotAcquiredError",
    "SessionNotRunningError",
    "TransportError",
    "UnknownCommandError",
    # Agent
    "AgentClient",
    "AgentSessionProvider",
    "BridgeSettings",
    "Dialect",
    "RemoteSessionDescriptor",
    "ReportSettings",
    "ReportType",
    # Routing and reporting
    "CommandEnvelope",
    "CommandRouter",
    "DriverCommandsFilter",
    "ProtocolModeAdapter",
    "Reporter",
    "ReportingStash",
    "is_legacy_mode",
    # Lifecycle and integration
    "FrameworkGuard",
    "FrameworkKind",
    "ShutdownCoordinator",
    "ShutdownHandle",
    "ShutdownState",
    # Drivers
    "AddonHelper",
    "BridgeContext",
    "BridgedDriver",
    "BridgedSession",
    "ChromeDriver",
    "EdgeDriver",
    "FirefoxDriver",
]
