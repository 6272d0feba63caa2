"""Shared fixtures: an in-process Agent served through ``httpx.MockTransport``.

No network, browser or Agent installation is needed; every HTTP call made
by the bridge is answered by ``FakeAgent.handle``.
"""
from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from agent_driver_bridge.config import BridgeSettings
from agent_driver_bridge.context import BridgeContext
from agent_driver_bridge.driver import BridgedDriver
from agent_driver_bridge.integration.guard import FrameworkKind

AGENT_URL = "http://agent.test:8585"
SERVER_PREFIX = "/wd/hub"
ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"

Responder = Callable[[httpx.Request], httpx.Response]


class FakeAgent:
    """Records requests and answers them like the Agent would.

    Parameters
    ----------
    dialect:
        Dialect reported for new sessions.
    session_status:
        HTTP status for session requests; anything but 200 is an error.
    """

    def __init__(self, dialect: str = "W3C", session_status: int = 200) -> None:
        self.dialect = dialect
        self.session_status = session_status
        self.session_requests: list[dict[str, Any]] = []
        self.commands: list[tuple[str, str, Any]] = []
        self.reports: dict[str, list[Any]] = {"batch": [], "step": [], "test": []}
        self.addon_requests: list[dict[str, Any]] = []
        self.routes: dict[tuple[str, str], Responder] = {}
        self.fail_reports = False
        self.unreachable = False
        self.commands_unreachable = False

    # ------------------------------------------------------------------
    # Configuration helpers
    # ------------------------------------------------------------------

    def route(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        """Answer ``method path`` (path relative to the WebDriver prefix)."""
        payload = {"value": None} if body is None else body
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def session_id(self, index: int = 1) -> str:
        return f"remote-session-{index}"

    def commands_named(self, method: str, path: str) -> list[tuple[str, str, Any]]:
        return [c for c in self.commands if c[0] == method and c[1] == path]

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else None

        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if path == "/api/status":
            return httpx.Response(200, json={"tag": "3.5.0"})

        if path == "/api/development/session":
            if self.session_status != 200:
                return httpx.Response(self.session_status, json={"message": "rejected"})
            self.session_requests.append(body)
            return httpx.Response(
                200,
                json={
                    "sessionId": self.session_id(len(self.session_requests)),
                    "serverAddress": AGENT_URL + SERVER_PREFIX,
                    "dialect": self.dialect,
                    "capabilities": {"browserName": "chrome", "browserVersion": "120.0"},
                },
            )

        if path.startswith("/api/development/report/"):
            if self.fail_reports:
                return httpx.Response(500, json={"message": "report storage unavailable"})
            self.reports[path.rsplit("/", 1)[-1]].append(body)
            return httpx.Response(200, json={})

        if path == "/api/addons/executions":
            self.addon_requests.append(body)
            return httpx.Response(200, json={"fields": {"result": "done"}})

        if self.commands_unreachable:
            raise httpx.ConnectError("connection reset", request=request)

        relative = path[len(SERVER_PREFIX):] if path.startswith(SERVER_PREFIX) else path
        self.commands.append((request.method, relative, body))
        responder = self.routes.get((request.method, relative))
        if responder is not None:
            return responder(request)
        return httpx.Response(200, json={"value": None})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep AGENT_BRIDGE_* variables of the developer shell out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("AGENT_BRIDGE_"):
            monkeypatch.delenv(name)


@pytest.fixture()
def fake_agent() -> FakeAgent:
    return FakeAgent()


@pytest.fixture()
def legacy_agent() -> FakeAgent:
    return FakeAgent(dialect="OSS")


@pytest.fixture()
def settings() -> BridgeSettings:
    return BridgeSettings(agent_url=AGENT_URL, token="dev-token", job_name="Smoke")


@pytest.fixture()
def context(fake_agent: FakeAgent, settings: BridgeSettings) -> Iterator[BridgeContext]:
    ctx = BridgeContext(settings, transport=fake_agent.transport)
    yield ctx
    ctx.close()


@pytest.fixture()
def driver(context: BridgeContext) -> Iterator[BridgedDriver]:
    bridged = BridgedDriver(context=context, framework=FrameworkKind.NONE)
    yield bridged
    bridged.quit()


@pytest.fixture()
def legacy_driver(legacy_agent: FakeAgent, settings: BridgeSettings) -> Iterator[BridgedDriver]:
    ctx = BridgeContext(settings, transport=legacy_agent.transport)
    bridged = BridgedDriver(context=ctx, framework=FrameworkKind.NONE)
    yield bridged
    bridged.quit()
    ctx.close()
