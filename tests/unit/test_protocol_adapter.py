"""Unit tests for agent_driver_bridge.protocol."""
from __future__ import annotations

import pytest
from selenium.webdriver.remote.command import Command
from selenium.webdriver.remote.remote_connection import remote_commands

from agent_driver_bridge.agent.models import Dialect, RemoteSessionDescriptor
from agent_driver_bridge.protocol.adapter import (
    ProtocolModeAdapter,
    is_legacy_mode,
    should_patch,
    update_send_keys_parameters,
)
from agent_driver_bridge.protocol.commands import LEGACY_COMMANDS, W3C_COMMANDS


def _descriptor(dialect: Dialect) -> RemoteSessionDescriptor:
    return RemoteSessionDescriptor(
        session_id="s-1",
        remote_address="http://agent.test:8585",
        dialect=dialect,
        agent_url="http://agent.test:8585",
    )


# ---------------------------------------------------------------------------
# Dialect parsing
# ---------------------------------------------------------------------------


class TestDialectParse:
    @pytest.mark.parametrize("raw", ["W3C", "w3c", " W3C "])
    def test_w3c_variants(self, raw: str) -> None:
        assert Dialect.parse(raw) is Dialect.W3C

    @pytest.mark.parametrize("raw", ["OSS", "", None])
    def test_everything_else_is_legacy(self, raw: str | None) -> None:
        assert Dialect.parse(raw) is Dialect.LEGACY


# ---------------------------------------------------------------------------
# is_legacy_mode / command tables
# ---------------------------------------------------------------------------


class TestProtocolModeAdapter:
    def test_is_legacy_mode(self) -> None:
        assert is_legacy_mode(_descriptor(Dialect.LEGACY)) is True
        assert is_legacy_mode(_descriptor(Dialect.W3C)) is False

    def test_w3c_table_selected(self) -> None:
        adapter = ProtocolModeAdapter(_descriptor(Dialect.W3C))
        assert adapter.command_table() is W3C_COMMANDS

    def test_legacy_table_selected(self) -> None:
        adapter = ProtocolModeAdapter(_descriptor(Dialect.LEGACY))
        assert adapter.command_table() is LEGACY_COMMANDS

    def test_tables_differ_for_window_handle(self) -> None:
        command = Command.W3C_GET_CURRENT_WINDOW_HANDLE
        assert W3C_COMMANDS[command].path == "/session/$sessionId/window"
        assert LEGACY_COMMANDS[command].path == "/session/$sessionId/window_handle"

    def test_w3c_table_is_seleniums_full_table(self) -> None:
        assert set(W3C_COMMANDS) == set(remote_commands)
        assert W3C_COMMANDS[Command.W3C_MAXIMIZE_WINDOW].method == "POST"

    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            W3C_COMMANDS["custom"] = W3C_COMMANDS[Command.GET]  # type: ignore[index]

    def test_legacy_encoding_rewrites_send_keys(self) -> None:
        adapter = ProtocolModeAdapter(_descriptor(Dialect.LEGACY))
        encoded = adapter.encode(Command.SEND_KEYS_TO_ELEMENT, {"id": "e", "value": "hi"})
        assert encoded == {"id": "e", "value": ["h", "i"]}

    def test_w3c_encoding_passes_through(self) -> None:
        adapter = ProtocolModeAdapter(_descriptor(Dialect.W3C))
        params = {"id": "e", "value": "hi"}
        assert adapter.encode(Command.SEND_KEYS_TO_ELEMENT, params) == params

    def test_legacy_encoding_leaves_other_commands_alone(self) -> None:
        adapter = ProtocolModeAdapter(_descriptor(Dialect.LEGACY))
        assert adapter.encode(Command.GET, {"url": "hi"}) == {"url": "hi"}


# ---------------------------------------------------------------------------
# Send-keys helpers
# ---------------------------------------------------------------------------


class TestSendKeysParameters:
    def test_should_patch(self) -> None:
        assert should_patch(Command.SEND_KEYS_TO_ELEMENT) is True
        assert should_patch("sendKeysToActiveElement") is True
        assert should_patch(Command.CLICK_ELEMENT) is False

    def test_string_value_split(self) -> None:
        assert update_send_keys_parameters({"value": "hi"}) == {"value": ["h", "i"]}

    def test_list_value_flattened(self) -> None:
        assert update_send_keys_parameters({"value": ["ab", "c"]}) == {"value": ["a", "b", "c"]}

    def test_text_used_when_value_missing(self) -> None:
        assert update_send_keys_parameters({"text": "ok"}) == {"value": ["o", "k"]}

    def test_text_dropped_when_value_present(self) -> None:
        result = update_send_keys_parameters({"text": "hi", "value": ["h", "i"]})
        assert result == {"value": ["h", "i"]}

    def test_input_not_mutated(self) -> None:
        params = {"value": "hi"}
        update_send_keys_parameters(params)
        assert params == {"value": "hi"}

    def test_nothing_to_rewrite(self) -> None:
        assert update_send_keys_parameters({"id": "e"}) == {"id": "e"}
