"""WebDriver dispatch tables for the two dialects the Agent may negotiate.

Each table maps a Selenium command name to an ``(HTTP method, path
template)`` pair.  Path templates use ``string.Template`` placeholders
(``$sessionId``, ``$id``, ``$name``, ...) filled from the command
parameters.

The W3C table is Selenium's own ``remote_commands`` table, so every
command a ``WebDriver`` can emit has a route.  The legacy table is the same
table with the JSON Wire Protocol paths swapped in where the two dialects
differ.

Attributes
----------
- W3C_COMMANDS     — W3C WebDriver endpoints
- LEGACY_COMMANDS  — JSON Wire Protocol endpoints
"""
from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple

from selenium.webdriver.remote.command import Command
from selenium.webdriver.remote.remote_connection import remote_commands

SEND_KEYS_TO_ACTIVE_ELEMENT = "sendKeysToActiveElement"


class CommandInfo(NamedTuple):
    """HTTP method and path template of one command."""

    method: str
    path: str


W3C_COMMANDS = MappingProxyType(
    {name: CommandInfo(method, path) for name, (method, path) in remote_commands.items()}
)

# Endpoints whose JSON Wire Protocol path differs from the W3C one.
# Selenium 4 only emits W3C command names, so they are keyed by those.
_LEGACY_OVERRIDES: dict[str, CommandInfo] = {
    Command.W3C_GET_CURRENT_WINDOW_HANDLE: CommandInfo("GET", "/session/$sessionId/window_handle"),
    Command.W3C_GET_WINDOW_HANDLES: CommandInfo("GET", "/session/$sessionId/window_handles"),
    Command.W3C_EXECUTE_SCRIPT: CommandInfo("POST", "/session/$sessionId/execute"),
    Command.W3C_EXECUTE_SCRIPT_ASYNC: CommandInfo("POST", "/session/$sessionId/execute_async"),
    Command.W3C_GET_ACTIVE_ELEMENT: CommandInfo("POST", "/session/$sessionId/element/active"),
    Command.W3C_GET_ALERT_TEXT: CommandInfo("GET", "/session/$sessionId/alert_text"),
    Command.W3C_SET_ALERT_VALUE: CommandInfo("POST", "/session/$sessionId/alert_text"),
    Command.W3C_ACCEPT_ALERT: CommandInfo("POST", "/session/$sessionId/accept_alert"),
    Command.W3C_DISMISS_ALERT: CommandInfo("POST", "/session/$sessionId/dismiss_alert"),
    SEND_KEYS_TO_ACTIVE_ELEMENT: CommandInfo("POST", "/session/$sessionId/keys"),
}

LEGACY_COMMANDS = MappingProxyType({**W3C_COMMANDS, **_LEGACY_OVERRIDES})
