"""Load workflow files and list the triggers they declare.

A workflow is a YAML document whose `on` mapping names the triggers:

    on:
      rss:
        url: https://example.com/feed.xml
        config:
          every: 10

String values may reference the invocation context with `${{ a.b.c }}`
expressions, e.g. `${{ env.FEED_URL }}` or `${{ github.event_name }}`.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

_EXPRESSION = re.compile(r"\$\{\{\s*([A-Za-z0-9_.\-]+)\s*\}\}")


class Workflow(BaseModel):
    """A parsed workflow file."""

    model_config = ConfigDict(frozen=True)

    path: Path
    relative_path: str
    data: dict[str, Any] = Field(default_factory=dict)


class RawTrigger(BaseModel):
    """One entry of a workflow's `on` mapping."""

    name: str
    options: dict[str, Any] = Field(default_factory=dict)


def build_context(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Build the expression context for the current process.

    The GitHub Actions event payload is read from `GITHUB_EVENT_PATH` when
    that variable points at a readable file.
    """

    env = dict(os.environ if environ is None else environ)
    github: dict[str, Any] = {
        "event_name": env.get("GITHUB_EVENT_NAME", ""),
        "repository": env.get("GITHUB_REPOSITORY", ""),
        "workspace": env.get("GITHUB_WORKSPACE", ""),
        "event": {},
    }

    event_path = env.get("GITHUB_EVENT_PATH")
    if event_path:
        try:
            github["event"] = json.loads(Path(event_path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Could not read GitHub event payload", extra={"path": event_path})

    return {"env": env, "github": github}


def _lookup(context: Mapping[str, Any], dotted: str) -> Any:
    current: Any = context
    for part in dotted.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return ""
        current = current[part]
    return current


def interpolate(value: Any, context: Mapping[str, Any]) -> Any:
    """Replace `${{ path }}` expressions in every string inside ``value``.

    A string made of a single expression takes the referenced value as-is,
    so `${{ github.event }}` yields a mapping rather than its text.
    """

    if isinstance(value, str):
        whole = _EXPRESSION.fullmatch(value.strip())
        if whole:
            return _lookup(context, whole.group(1))
        return _EXPRESSION.sub(lambda m: str(_lookup(context, m.group(1))), value)
    if isinstance(value, list):
        return [interpolate(v, context) for v in value]
    if isinstance(value, dict):
        return {k: interpolate(v, context) for k, v in value.items()}
    return value


def _read_workflow(path: Path, cwd: Path, context: Mapping[str, Any]) -> Workflow:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        logger.warning(
            "Workflow file is not a mapping; treating as empty", extra={"path": str(path)}
        )
        raw = {}

    # PyYAML reads a bare `on` key as boolean True.
    if any(key is True for key in raw) and "on" not in raw:
        raw["on"] = raw.pop(True)

    data = interpolate({str(key): value for key, value in raw.items()}, context)
    try:
        relative = path.relative_to(cwd).as_posix()
    except ValueError:
        relative = Path(os.path.relpath(path, cwd)).as_posix()

    logger.info("Loaded workflow", extra={"path": str(path), "relative_path": relative})
    return Workflow(path=path, relative_path=relative, data=data)


async def load_workflow(
    *, path: str | Path, cwd: str | Path, context: Mapping[str, Any]
) -> Workflow:
    """Load and interpolate the workflow at ``path`` (resolved against ``cwd``).

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
    """

    base = Path(cwd).resolve()
    full_path = (base / path).resolve()
    return await asyncio.to_thread(_read_workflow, full_path, base, context)


def extract_raw_triggers(
    workflow_data: Mapping[str, Any] | None,
    global_options: Mapping[str, Any] | None = None,
) -> list[RawTrigger]:
    """List the triggers declared under `on`, in file order.

    `global_options` sit beneath each trigger's own `config` block.
    """

    if not workflow_data:
        return []
    on = workflow_data.get("on")

    entries: list[tuple[str, Any]]
    if isinstance(on, str):
        entries = [(on, None)]
    elif isinstance(on, list):
        entries = [(str(name), None) for name in on]
    elif isinstance(on, Mapping):
        entries = [(str(name), opts) for name, opts in on.items()]
    else:
        return []

    triggers: list[RawTrigger] = []
    for name, opts in entries:
        options: dict[str, Any] = dict(opts) if isinstance(opts, Mapping) else {}
        if global_options:
            config = options.get("config")
            options["config"] = {
                **global_options,
                **(config if isinstance(config, Mapping) else {}),
            }
        triggers.append(RawTrigger(name=name, options=options))
    return triggers
