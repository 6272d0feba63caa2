"""Environment-derived settings for bridged sessions.

``BridgeSettings`` collects the optional inputs of a bridged session: the
Agent address, the development token, reporting names and flags.  Values
are read from ``AGENT_BRIDGE_*`` environment variables; any value passed
explicitly to ``BridgedDriver`` or ``AgentSessionProvider`` overrides the
corresponding setting.

Environment variables
---------------------
- AGENT_BRIDGE_URL              — Agent API address
- AGENT_BRIDGE_TOKEN            — development token
- AGENT_BRIDGE_PROJECT          — project name for reports
- AGENT_BRIDGE_JOB              — job name for reports
- AGENT_BRIDGE_REPORT_TYPE      — CLOUD_AND_LOCAL, LOCAL or CLOUD
- AGENT_BRIDGE_DISABLE_REPORTS  — true/false
- AGENT_BRIDGE_FRAMEWORK        — none or behave
- AGENT_BRIDGE_TIMEOUT          — request timeout in seconds

Classes
-------
- BridgeSettings  — pydantic-settings model with a ``from_env`` factory
"""
from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from agent_driver_bridge.agent.models import ReportSettings, ReportType
from agent_driver_bridge.integration.guard import FrameworkKind

DEFAULT_AGENT_URL: str = "http://localhost:8585"

ENV_PREFIX = "AGENT_BRIDGE_"


class BridgeSettings(BaseSettings):
    """Settings shared by every session opened through one context.

    Parameters
    ----------
    agent_url:
        Base address of the Agent API.
    token:
        Development token sent in the ``Authorization`` header.
    project_name:
        Project name attached to reports.
    job_name:
        Job name attached to reports.
    report_type:
        Where the Agent should store reports.
    disable_reports:
        When True, nothing is reported for sessions using these settings.
    framework:
        Explicit test framework declaration.  ``None`` means detect.
    request_timeout:
        Seconds before a single HTTP call to the Agent is abandoned.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    agent_url: str = Field(default=DEFAULT_AGENT_URL, validation_alias=f"{ENV_PREFIX}URL")
    token: str | None = None
    project_name: str | None = Field(default=None, validation_alias=f"{ENV_PREFIX}PROJECT")
    job_name: str | None = Field(default=None, validation_alias=f"{ENV_PREFIX}JOB")
    report_type: ReportType = ReportType.CLOUD_AND_LOCAL
    disable_reports: bool = False
    framework: FrameworkKind | None = None
    request_timeout: float = Field(default=120.0, gt=0, validation_alias=f"{ENV_PREFIX}TIMEOUT")

    @field_validator("report_type", mode="before")
    @classmethod
    def _report_type_upper(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("framework", mode="before")
    @classmethod
    def _framework_lower(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @classmethod
    def from_env(cls) -> BridgeSettings:
        """Build settings from the ``AGENT_BRIDGE_*`` environment variables.

        Returns
        -------
        BridgeSettings
            Settings with every unset variable left at its default.
        """
        return cls()

    def report_settings(self) -> ReportSettings:
        """Return the reporting names and type as a ``ReportSettings``."""
        return ReportSettings(
            project_name=self.project_name,
            job_name=self.job_name,
            report_type=self.report_type,
        )
