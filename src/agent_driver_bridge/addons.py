"""Add-on action execution through the Agent.

Classes
-------
- AddonHelper  — run Agent add-on actions against the bridged session
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agent_driver_bridge.routing.router import CommandRouter


class AddonHelper:
    """Execute add-on actions in the context of one bridged session.

    Parameters
    ----------
    router:
        Router of the session the actions run against.
    """

    def __init__(self, router: CommandRouter) -> None:
        self._router = router

    def execute(
        self,
        action_guid: str,
        parameters: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Run the action identified by ``action_guid``.

        Parameters
        ----------
        action_guid:
            Identifier of the add-on action.
        parameters:
            Input fields of the action.
        timeout:
            Seconds to wait for the action.  The client timeout applies
            when omitted.

        Returns
        -------
        dict[str, Any]
            Output fields returned by the action.
        """
        payload = {
            "guid": action_guid,
            "sessionId": self._router.session_id,
            "parameters": parameters or {},
        }
        result = self._router.agent.execute_addon(payload, timeout=timeout)
        return dict(result.get("fields") or {})
