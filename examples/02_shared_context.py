#!/usr/bin/env python3
"""Example: Shared context — agent-driver-bridge

Drivers created from one ``BridgeContext`` share the Agent session
provider.  Once a driver has quit, the next one starts a fresh session.

Usage:
    python examples/02_shared_context.py

Requirements:
    pip install agent-driver-bridge
"""
from __future__ import annotations

from agent_driver_bridge import BridgeContext, BridgeSettings, DriverCommandsFilter


def main() -> None:
    settings = BridgeSettings.from_env()
    print(f"Agent: {settings.agent_url}")

    with BridgeContext(settings) as context:
        # Step 1: First driver, with only failing commands reported
        with context.driver(job_name="Shared context, first") as first:
            first.report().disable_command_reports(DriverCommandsFilter.PASSING)
            first.get("https://example.org")
            print(f"First session: {first.session_id}")

        # Step 2: Second driver gets a new session from the same provider
        with context.driver(job_name="Shared context, second") as second:
            second.get("https://example.org")
            print(f"Second session: {second.session_id}")


if __name__ == "__main__":
    main()
