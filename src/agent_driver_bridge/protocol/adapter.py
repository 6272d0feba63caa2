"""Dialect-specific command encoding.

The Agent reports which wire-protocol dialect the browser session speaks.
``ProtocolModeAdapter`` turns that into the dispatch table the router
uses and rewrites send-keys parameters for legacy sessions, whose
endpoint expects ``value`` as a list of single characters.

Classes
-------
- ProtocolModeAdapter  — dispatch table and parameter encoding per dialect
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from selenium.webdriver.remote.command import Command

from agent_driver_bridge.agent.models import RemoteSessionDescriptor
from agent_driver_bridge.protocol.commands import (
    LEGACY_COMMANDS,
    SEND_KEYS_TO_ACTIVE_ELEMENT,
    W3C_COMMANDS,
    CommandInfo,
)

SEND_KEYS_COMMANDS = frozenset({Command.SEND_KEYS_TO_ELEMENT, SEND_KEYS_TO_ACTIVE_ELEMENT})


def is_legacy_mode(descriptor: RemoteSessionDescriptor) -> bool:
    """Return True when ``descriptor`` negotiated the legacy dialect."""
    return not descriptor.is_w3c


def should_patch(command: str) -> bool:
    """Return True for commands the legacy endpoint encodes differently."""
    return command in SEND_KEYS_COMMANDS


def update_send_keys_parameters(params: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``params`` with ``value`` as a list of characters.

    The text is taken from ``value`` (a string or a list of strings) or,
    when ``value`` is absent, from ``text``.  ``text`` is dropped.

    Example
    -------
    >>> update_send_keys_parameters({"value": "hi"})
    {'value': ['h', 'i']}
    """
    updated = dict(params)
    text = updated.pop("text", None)
    value = updated.get("value", text)
    if value is None:
        return updated
    if isinstance(value, str):
        updated["value"] = list(value)
    else:
        updated["value"] = [char for chunk in value for char in str(chunk)]
    return updated


class ProtocolModeAdapter:
    """Encoding rules for one bridged session.

    Parameters
    ----------
    descriptor:
        The session whose dialect decides the encoding.
    """

    def __init__(self, descriptor: RemoteSessionDescriptor) -> None:
        self._descriptor = descriptor

    @property
    def is_legacy_mode(self) -> bool:
        """True when the session speaks the legacy dialect."""
        return is_legacy_mode(self._descriptor)

    def command_table(self) -> Mapping[str, CommandInfo]:
        """Return the dispatch table matching the negotiated dialect."""
        return LEGACY_COMMANDS if self.is_legacy_mode else W3C_COMMANDS

    def encode(self, command: str, params: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``params`` in the shape the Agent expects for ``command``."""
        if self.is_legacy_mode and should_patch(command):
            return update_send_keys_parameters(params)
        return dict(params)

    def __repr__(self) -> str:
        return f"ProtocolModeAdapter(dialect={self._descriptor.dialect.name})"
