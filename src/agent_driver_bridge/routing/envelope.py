"""Outbound command envelope.

Classes
-------
- CommandEnvelope  — one command addressed to one bridged session
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CommandEnvelope:
    """A command ready to be sent to the Agent.

    Attributes
    ----------
    command:
        Selenium command name.
    session_id:
        Bridged session the command is addressed to.
    parameters:
        Command parameters, already encoded for the session's dialect.
    """

    command: str
    session_id: str
    parameters: dict[str, Any] = field(default_factory=dict)

    def path_values(self) -> dict[str, Any]:
        """Values available to the dispatch table's path placeholders."""
        return {**self.parameters, "sessionId": self.session_id}

    def body(self) -> dict[str, Any]:
        """Parameters sent as the JSON request body."""
        return {key: value for key, value in self.parameters.items() if key != "sessionId"}
