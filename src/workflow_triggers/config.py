"""Settings for trigger resolution.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

These values only seed the process defaults threaded into the helper
assembler (see :class:`workflow_triggers.helpers.HelperContext`); nothing in
the resolution path reads them implicitly.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workflow_triggers.logging import to_logging_level


class TriggerSettings(BaseSettings):
    """Process-wide settings.

    Environment variables:
    - LOG_LEVEL                           (optional)
    - WORKFLOW_TRIGGERS_JSON_LOGS         (optional)
    - WORKFLOW_TRIGGERS_CACHE_PATH        (optional)
    - WORKFLOW_TRIGGERS_APP_NAME          (optional)
    - WORKFLOW_TRIGGERS_USER_AGENT        (optional)
    - WORKFLOW_TRIGGERS_HTTP_TIMEOUT      (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `TriggerSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="info",
        validation_alias="LOG_LEVEL",
        description="Default level for the root logger and every trigger logger",
    )
    json_logs: bool = Field(
        default=False,
        validation_alias="WORKFLOW_TRIGGERS_JSON_LOGS",
        description="Emit root log records as JSON lines instead of coloured text",
    )
    cache_path: Path = Field(
        default=Path(".cache/triggers"),
        validation_alias="WORKFLOW_TRIGGERS_CACHE_PATH",
        description="Directory holding one JSON cache file per trigger namespace",
    )
    app_name: str = Field(
        default="Workflow",
        validation_alias="WORKFLOW_TRIGGERS_APP_NAME",
        description="Prefix of trigger logger names: '<app_name>-trigger [<name>]'",
    )
    user_agent: str = Field(
        default="workflow-triggers",
        validation_alias="WORKFLOW_TRIGGERS_USER_AGENT",
        description="User-Agent sent by the shared HTTP session",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="WORKFLOW_TRIGGERS_HTTP_TIMEOUT",
        description="Timeout used by the feed parser when fetching feeds",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _require_known_log_level(cls, value: str) -> str:
        to_logging_level(value)
        return value
