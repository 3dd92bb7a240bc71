"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from workflow_triggers.config import TriggerSettings
from workflow_triggers.helpers import HelperContext

_ENV_VARS = (
    "LOG_LEVEL",
    "WORKFLOW_TRIGGERS_JSON_LOGS",
    "WORKFLOW_TRIGGERS_CACHE_PATH",
    "WORKFLOW_TRIGGERS_APP_NAME",
    "WORKFLOW_TRIGGERS_USER_AGENT",
    "WORKFLOW_TRIGGERS_HTTP_TIMEOUT",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_settings_defaults(clean_env: Path) -> None:
    settings = TriggerSettings()

    assert settings.log_level == "info"
    assert settings.json_logs is False
    assert settings.cache_path == Path(".cache/triggers")
    assert settings.app_name == "Workflow"
    assert settings.http_timeout_seconds == 30.0


def test_settings_loads_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                "LOG_LEVEL=debug",
                "WORKFLOW_TRIGGERS_APP_NAME=Actions",
                "WORKFLOW_TRIGGERS_CACHE_PATH=/var/cache/triggers",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = TriggerSettings()

    assert settings.log_level == "debug"
    assert settings.app_name == "Actions"
    assert settings.cache_path == Path("/var/cache/triggers")


def test_helper_context_from_settings(clean_env: Path) -> None:
    settings = TriggerSettings(_env_file=None)

    context = HelperContext.from_settings(settings)

    assert context.default_log_level == "info"
    assert context.app_name == "Workflow"
    assert context.http.headers["User-Agent"] == "workflow-triggers"
    assert context.cache_factory.path_for("x").parent == Path(".cache/triggers")


def test_settings_reject_unknown_log_level(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with pytest.raises(ValidationError):
        TriggerSettings()
