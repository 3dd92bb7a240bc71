"""Unit tests for the CLI."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from workflow_triggers.identity import derive_trigger_id
from workflow_triggers.main import main


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("WORKFLOW_TRIGGERS_CACHE_PATH", str(tmp_path / "cache"))
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("WORKFLOW_TRIGGERS_JSON_LOGS", "true")

    # `main` reconfigures the root logger.
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_trigger_id_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["trigger-id", "--name", "rss", "--path", "workflows/feed.yml"]) == 0

    assert capsys.readouterr().out.strip() == derive_trigger_id("rss", "workflows/feed.yml")


def test_resolve_command(
    workflow_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        [
            "resolve",
            "--workflow",
            "workflows/feed.yml",
            "--trigger",
            "rss",
            "--cwd",
            str(tmp_path),
        ]
    )

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["triggerId"] == derive_trigger_id("rss", "workflows/feed.yml")
    assert out["options"]["every"] == 10
    assert out["options"]["shouldDeduplicate"] is True


def test_resolve_command_webhook_event(
    workflow_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        [
            "resolve",
            "--workflow",
            "workflows/feed.yml",
            "--trigger",
            "rss",
            "--event",
            "webhook",
            "--cwd",
            str(tmp_path),
        ]
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out)["options"]["shouldDeduplicate"] is False


def test_resolve_command_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "bad.yml").write_text(
        "on:\n  rss:\n    config:\n      manualRunEvent: 42\n", encoding="utf-8"
    )

    code = main(["resolve", "--workflow", "bad.yml", "--trigger", "rss", "--cwd", str(tmp_path)])

    assert code == 2


def test_resolve_command_missing_workflow(tmp_path: Path) -> None:
    code = main(
        ["resolve", "--workflow", "nope.yml", "--trigger", "rss", "--cwd", str(tmp_path)]
    )

    assert code == 1


def test_resolve_command_unknown_trigger_log_level(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "w.yml").write_text(
        "on:\n  rss:\n    logLevel: verbose\n    config:\n      every: 3\n", encoding="utf-8"
    )

    code = main(["resolve", "--workflow", "w.yml", "--trigger", "rss", "--cwd", str(tmp_path)])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["options"]["every"] == 3


def test_unknown_log_level_setting_is_a_configuration_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    code = main(["trigger-id", "--name", "rss", "--path", "workflows/feed.yml"])

    assert code == 2
    assert "Configuration error" in capsys.readouterr().err
