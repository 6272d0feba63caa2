"""CLI entry point for agent-driver-bridge.

Invoked as::

    agent-driver-bridge [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m agent_driver_bridge.cli.main

Commands
--------
- version  — Show detailed version information
- status   — Check that the Agent is reachable and show its version
- session  — Open a bridged session, show it, and quit it
"""
from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.table import Table

console = Console()

_BROWSERS = ("chrome", "firefox", "edge")


# ---------------------------------------------------------------------------
# Driver factory
# ---------------------------------------------------------------------------


def _make_options(browser: str, headless: bool) -> object:
    """Return Selenium options for ``browser``.

    Parameters
    ----------
    browser:
        One of ``"chrome"``, ``"firefox"`` or ``"edge"``.
    headless:
        Request a headless browser.

    Returns
    -------
    ArgOptions
        A configured Selenium options object.
    """
    from selenium.webdriver import ChromeOptions, EdgeOptions, FirefoxOptions

    factories = {"chrome": ChromeOptions, "firefox": FirefoxOptions, "edge": EdgeOptions}
    options = factories[browser]()
    if headless:
        options.add_argument("-headless" if browser == "firefox" else "--headless=new")
    return options


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, help="Log bridge activity to stderr.")
def cli(verbose: bool) -> None:
    """Run Selenium sessions through the Agent"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from agent_driver_bridge import __version__

    console.print(f"[bold]agent-driver-bridge[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


@cli.command(name="status")
@click.option("--agent-url", default=None, help="Agent address (defaults to AGENT_BRIDGE_URL).")
def status_command(agent_url: str | None) -> None:
    """Check that the Agent is reachable."""
    from agent_driver_bridge.agent.client import AgentClient
    from agent_driver_bridge.config import BridgeSettings
    from agent_driver_bridge.exceptions import BridgeError

    settings = BridgeSettings.from_env()
    client = AgentClient(agent_url or settings.agent_url, settings.token, timeout=settings.request_timeout)
    try:
        status = client.get_status()
    except BridgeError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    finally:
        client.close()

    console.print(
        f"[green]Agent is running[/green] at {client.agent_url} "
        f"(version {status.get('tag', 'unknown')})"
    )


# ---------------------------------------------------------------------------
# session
# ---------------------------------------------------------------------------


@cli.command(name="session")
@click.option("--agent-url", default=None, help="Agent address (defaults to AGENT_BRIDGE_URL).")
@click.option("--token", default=None, help="Development token (defaults to AGENT_BRIDGE_TOKEN).")
@click.option(
    "--browser",
    default="chrome",
    show_default=True,
    type=click.Choice(_BROWSERS, case_sensitive=False),
    help="Browser to request.",
)
@click.option("--headless", is_flag=True, help="Request a headless browser.")
@click.option("--disable-reports", is_flag=True, help="Do not create a report.")
def session_command(
    agent_url: str | None,
    token: str | None,
    browser: str,
    headless: bool,
    disable_reports: bool,
) -> None:
    """Open a bridged session, print its details, then quit it."""
    from agent_driver_bridge.driver import BridgedDriver
    from agent_driver_bridge.exceptions import BridgeError

    try:
        with BridgedDriver(
            remote_address=agent_url,
            token=token,
            options=_make_options(browser.lower(), headless),
            disable_reports=disable_reports,
            job_name="agent-driver-bridge CLI",
        ) as driver:
            descriptor = driver.descriptor
            table = Table(title=f"Session {descriptor.session_id[:8]}", show_lines=True)
            table.add_column("Field", style="bold cyan")
            table.add_column("Value")
            table.add_row("session_id", descriptor.session_id)
            table.add_row("remote_address", descriptor.remote_address)
            table.add_row("dialect", descriptor.dialect.name)
            table.add_row("browser", str(descriptor.capabilities.get("browserName", browser)))
            table.add_row("agent_url", descriptor.agent_url)
            console.print(table)
    except BridgeError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    console.print("[green]Session closed.[/green]")


if __name__ == "__main__":
    cli()
