"""Bridged driver facade.

``BridgedDriver`` looks like a Selenium WebDriver to test code, but the
browser session behind it is started and owned by the Agent.  The facade
owns a plain Selenium ``WebDriver`` whose command executor is a
``CommandRouter`` bound to the Agent session, so every Selenium operation
is routed to the Agent.  Teardown is funnelled through a
``ShutdownHandle`` and happens exactly once.

Example
-------
::

    from agent_driver_bridge import ChromeDriver

    with ChromeDriver(token="...", project_name="Demo", job_name="Smoke") as driver:
        driver.get("https://example.org")
        driver.report().step("Opened the home page", passed=True)

Classes
-------
- BridgedSession  — runtime state of a bridged driver
- BridgedDriver   — the facade
- ChromeDriver, FirefoxDriver, EdgeDriver  — browser-specific defaults
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from selenium.common.exceptions import InvalidArgumentException, InvalidSelectorException
from selenium.webdriver import ChromeOptions, EdgeOptions, FirefoxOptions
from selenium.webdriver.common.by import By
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.remote.command import Command
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from agent_driver_bridge.addons import AddonHelper
from agent_driver_bridge.agent.models import RemoteSessionDescriptor, ReportSettings, ReportType
from agent_driver_bridge.exceptions import BridgeError, NoSuchElementError
from agent_driver_bridge.integration.guard import FrameworkGuard, FrameworkKind
from agent_driver_bridge.lifecycle.shutdown import ShutdownCoordinator, ShutdownHandle
from agent_driver_bridge.protocol.adapter import ProtocolModeAdapter
from agent_driver_bridge.reporting.models import ReportingOptions
from agent_driver_bridge.reporting.reporter import Reporter
from agent_driver_bridge.routing.router import CommandRouter

if TYPE_CHECKING:
    from agent_driver_bridge.context import BridgeContext

logger = logging.getLogger(__name__)


def _selenium_options(options: object) -> Any:
    """Return an options object Selenium's ``WebDriver`` can be built from."""
    if options is None:
        return ArgOptions()
    if isinstance(options, dict):
        wrapped = ArgOptions()
        for name, value in options.items():
            wrapped.set_capability(name, value)
        return wrapped
    return options


@dataclass
class BridgedSession:
    """Runtime state of one bridged driver.

    ``session_id`` always equals the Agent-issued identifier; ``running``
    only ever goes from True to False.
    """

    session_id: str
    router: CommandRouter
    running: bool = True


class BridgedDriver:
    """A Selenium-compatible driver whose session lives in the Agent.

    Attribute access not defined here is delegated to the owned Selenium
    ``WebDriver``, so ``driver.get(url)``, ``driver.title`` and friends work
    as usual.

    Parameters
    ----------
    remote_address:
        Agent API address.  Defaults to the context settings.
    token:
        Development token.  Defaults to the context settings.
    options:
        Selenium options (or a capabilities dict) to request.
    project_name:
        Project name for reports.
    job_name:
        Job name for reports; also names the automatic test report.
    disable_reports:
        Disable all reporting for this session.
    report_type:
        Report destination.
    framework:
        Explicit test framework declaration; detected when omitted.
    context:
        Context sharing the Agent session provider.  A private context is
        created (and closed on teardown) when omitted.

    Raises
    ------
    AgentConnectionError
        If the Agent cannot be reached.
    SessionNegotiationError
        If the Agent refuses the session.
    IntegrationMissingError
        If the detected framework lacks its reporting plugin.  The session
        has been torn down before this is raised.
    """

    def __init__(
        self,
        remote_address: str | None = None,
        token: str | None = None,
        options: object = None,
        project_name: str | None = None,
        job_name: str | None = None,
        disable_reports: bool = False,
        report_type: ReportType | None = None,
        framework: FrameworkKind | None = None,
        context: BridgeContext | None = None,
    ) -> None:
        if context is None:
            from agent_driver_bridge.context import BridgeContext

            context = BridgeContext()
            self._owns_context = True
        else:
            self._owns_context = False
        self._context = context
        settings = context.settings
        provider = context.provider

        report_settings = ReportSettings(
            project_name=project_name or settings.project_name,
            job_name=job_name or settings.job_name,
            report_type=report_type or settings.report_type,
        )
        disabled = disable_reports or settings.disable_reports

        try:
            self._descriptor = provider.acquire(
                remote_address, token, options, report_settings, disabled
            )
        except Exception:
            self._close_owned_context()
            raise

        router: CommandRouter | None = None
        try:
            adapter = ProtocolModeAdapter(self._descriptor)
            router = CommandRouter(
                self._descriptor,
                provider.client_for(self._descriptor),
                adapter,
                commands=adapter.command_table(),
                reporting=ReportingOptions(
                    disabled=disabled,
                    test_name=report_settings.job_name or "Unnamed Test",
                ),
                timeout=settings.request_timeout,
                transport=provider.transport,
            )

            # Selenium's own new-session request is absorbed by the router.
            self._driver = WebDriver(command_executor=router, options=_selenium_options(options))
            self._driver.session_id = self._descriptor.session_id
            self._driver.caps = dict(self._descriptor.capabilities)

            self._session = BridgedSession(session_id=self._descriptor.session_id, router=router)
            self._shutdown_handle = ShutdownHandle(
                ShutdownCoordinator(self._teardown, name=self._descriptor.session_id)
            )
        except Exception:
            self._abandon(router)
            raise

        FrameworkGuard(framework if framework is not None else settings.framework).apply(
            self.report(), self.stop
        )
        logger.debug("BridgedDriver: session %r is running", self.session_id)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        """Identifier of the Agent-issued session."""
        return self._session.session_id

    @property
    def descriptor(self) -> RemoteSessionDescriptor:
        """The Agent session this driver is bridged to."""
        return self._descriptor

    @property
    def is_running(self) -> bool:
        """True until the session has been stopped."""
        return self._session.running

    @property
    def driver(self) -> WebDriver:
        """The owned Selenium driver."""
        return self._driver

    # ------------------------------------------------------------------
    # Capability handles
    # ------------------------------------------------------------------

    def report(self) -> Reporter:
        """Return the reporting handle for this session."""
        return Reporter(self._session.router)

    def addons(self) -> AddonHelper:
        """Return the add-on execution handle for this session."""
        return AddonHelper(self._session.router)

    # ------------------------------------------------------------------
    # Element lookup
    # ------------------------------------------------------------------

    def find_element(self, by: str = By.ID, value: str | None = None) -> WebElement:
        """Find an element, reporting invalid locators as missing elements.

        Raises
        ------
        NoSuchElementError
            If no element matches or the locator is invalid.
        """
        try:
            return self._driver.find_element(by, value)
        except (InvalidSelectorException, InvalidArgumentException) as exc:
            message = f"Could not find element located by {by}={value!r}"
            logger.error(message)
            raise NoSuchElementError(message) from exc

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def stop(self) -> None:
        """Send pending reports and close the browser session.

        Calling ``stop`` again is a no-op.
        """
        self._shutdown_handle.dispose()

    def quit(self) -> None:
        """Quit the driver and end the Agent session, unless already stopped."""
        if self.is_running:
            self.stop()
        else:
            logger.info("Driver is not running, skipping shutdown sequence")

    def _teardown(self) -> None:
        router = self._session.router
        try:
            router.flush_stash()
        except BridgeError as exc:
            logger.warning("BridgedDriver: failed to flush stashed reports: %s", exc)
        self._session.running = False
        router.begin_teardown()
        last = self._context.provider.release(self._descriptor)
        try:
            if last:
                self._driver.quit()
            else:
                logger.info(
                    "BridgedDriver: session %r is shared by other drivers, leaving it open",
                    self.session_id,
                )
                self._driver.stop_client()
                router.close()
        finally:
            self._close_owned_context()

    def _abandon(self, router: CommandRouter | None) -> None:
        """Undo a construction that failed after the session was acquired."""
        last = self._context.provider.release(self._descriptor)
        if router is not None:
            if last:
                try:
                    router.execute(Command.QUIT)
                except BridgeError as exc:
                    logger.warning("BridgedDriver: could not quit abandoned session: %s", exc)
            router.close()
        self._close_owned_context()

    def _close_owned_context(self) -> None:
        if self._owns_context:
            self._context.close()

    # ------------------------------------------------------------------
    # Context manager / delegation
    # ------------------------------------------------------------------

    def __enter__(self) -> BridgedDriver:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.quit()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._driver, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(session_id={self.session_id!r}, running={self.is_running})"


class ChromeDriver(BridgedDriver):
    """Bridged driver requesting Chrome unless other options are given."""

    def __init__(self, *args: Any, options: object = None, **kwargs: Any) -> None:
        super().__init__(*args, options=options if options is not None else ChromeOptions(), **kwargs)


class FirefoxDriver(BridgedDriver):
    """Bridged driver requesting Firefox unless other options are given."""

    def __init__(self, *args: Any, options: object = None, **kwargs: Any) -> None:
        super().__init__(*args, options=options if options is not None else FirefoxOptions(), **kwargs)


class EdgeDriver(BridgedDriver):
    """Bridged driver requesting Edge unless other options are given."""

    def __init__(self, *args: Any, options: object = None, **kwargs: Any) -> None:
        super().__init__(*args, options=options if options is not None else EdgeOptions(), **kwargs)
