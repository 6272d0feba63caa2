"""Agent session domain models.

Classes
-------
- Dialect                  — negotiated wire-protocol dialect
- ReportType               — where the Agent stores reports
- ReportSettings           — project/job naming for reports
- RemoteSessionDescriptor  — immutable description of an Agent-issued session
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Dialect(str, Enum):
    """Wire-protocol dialect negotiated by the Agent."""

    LEGACY = "OSS"
    W3C = "W3C"

    @classmethod
    def parse(cls, value: str | None) -> Dialect:
        """Map the Agent's dialect string onto a member.

        Anything other than ``"W3C"`` (case-insensitive) is treated as the
        legacy JSON Wire dialect, which is what older Agents report.
        """
        if value is not None and value.strip().upper() == cls.W3C.value:
            return cls.W3C
        return cls.LEGACY


class ReportType(str, Enum):
    """Report destinations understood by the Agent."""

    CLOUD_AND_LOCAL = "CLOUD_AND_LOCAL"
    LOCAL = "LOCAL"
    CLOUD = "CLOUD"


class ReportSettings(BaseModel):
    """Naming and destination of the reports produced by a session.

    Parameters
    ----------
    project_name:
        Project the execution is reported under.
    job_name:
        Job the execution is reported under.
    report_type:
        Local, cloud, or both.
    """

    project_name: str | None = None
    job_name: str | None = None
    report_type: ReportType = ReportType.CLOUD_AND_LOCAL

    model_config = {"frozen": True}


class RemoteSessionDescriptor(BaseModel):
    """A session started by the Agent on behalf of this process.

    Descriptors are frozen: they are shared between the provider, the
    router and the facade and none of them may alter it.

    Parameters
    ----------
    session_id:
        Opaque session identifier issued by the Agent.
    capabilities:
        Capabilities the browser session was actually started with.
    remote_address:
        WebDriver endpoint commands for this session are sent to.
    dialect:
        Negotiated wire-protocol dialect.
    agent_url:
        Agent API address the session was negotiated against.
    """

    session_id: str
    capabilities: dict[str, Any] = Field(default_factory=dict)
    remote_address: str
    dialect: Dialect = Dialect.W3C
    agent_url: str

    model_config = {"frozen": True}

    @property
    def is_w3c(self) -> bool:
        """True when the session speaks the W3C dialect."""
        return self.dialect is Dialect.W3C
