#!/usr/bin/env python3
"""Example: Quickstart — agent-driver-bridge

Minimal working example: open a Chrome session through a locally running
Agent, drive a page, report a step, and quit.

Usage:
    AGENT_BRIDGE_TOKEN=<development token> python examples/01_quickstart.py

Requirements:
    pip install agent-driver-bridge
"""
from __future__ import annotations

from selenium.webdriver.common.by import By

import agent_driver_bridge
from agent_driver_bridge import ChromeDriver, NoSuchElementError


def main() -> None:
    print(f"agent-driver-bridge version: {agent_driver_bridge.__version__}")

    # Step 1: The Agent starts the browser; the driver is bridged to it
    with ChromeDriver(project_name="Examples", job_name="Quickstart") as driver:
        print(f"Session '{driver.session_id}' ({driver.descriptor.dialect.name})")

        # Step 2: Plain Selenium calls are routed to the Agent
        driver.get("https://example.org")
        print(f"Title: {driver.title}")

        # Step 3: Invalid or unmatched locators surface as NoSuchElementError
        try:
            driver.find_element(By.XPATH, "//[")
        except NoSuchElementError as exc:
            print(f"Lookup failed as expected: {exc.msg}")

        # Step 4: Report an explicit step
        driver.report().step("Opened example.org", passed=True)

    # Leaving the block flushed the reports and quit the session
    print(f"Running after quit: {driver.is_running}")


if __name__ == "__main__":
    main()
