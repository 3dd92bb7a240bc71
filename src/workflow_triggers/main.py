"""CLI entrypoint: inspect how a workflow's trigger resolves."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import yaml
from pydantic import ValidationError

from workflow_triggers import __version__
from workflow_triggers.config import TriggerSettings
from workflow_triggers.errors import WorkflowTriggersError
from workflow_triggers.events import EventType, TriggerEvent
from workflow_triggers.helpers import HelperContext
from workflow_triggers.identity import derive_trigger_id
from workflow_triggers.logging import configure_logging
from workflow_triggers.options import resolve_general_options
from workflow_triggers.params import build_trigger_constructor_params

logger = logging.getLogger(__name__)


class _BareTrigger:
    """Stand-in instance with no factory defaults and no custom item key."""

    config: dict[str, Any] | None = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-triggers",
        description="Resolve workflow trigger options and identities",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-triggers {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Print a trigger's resolved options")
    resolve.add_argument("--workflow", required=True, help="Workflow file path")
    resolve.add_argument("--trigger", required=True, help="Trigger name under `on`")
    resolve.add_argument(
        "--event",
        default=EventType.SCHEDULE.value,
        choices=[e.value for e in EventType],
        help="Invocation event type (default: schedule)",
    )
    resolve.add_argument("--cwd", default=None, help="Directory the workflow path is relative to")

    trigger_id = subparsers.add_parser("trigger-id", help="Print the id of a trigger")
    trigger_id.add_argument("--name", required=True, help="Trigger name")
    trigger_id.add_argument("--path", required=True, help="Workflow-relative path")

    return parser


async def _resolve(args: argparse.Namespace, context: HelperContext) -> dict[str, Any]:
    params = await build_trigger_constructor_params(
        name=args.trigger,
        cwd=args.cwd,
        workflow_path=args.workflow,
        context=context,
    )
    final = resolve_general_options(
        _BareTrigger(), params.options, TriggerEvent(type=args.event)
    )
    return {
        "trigger": args.trigger,
        "workflow": params.workflow.relative_path,
        "triggerId": params.helpers.trigger_id,
        "options": final.to_dict(),
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = TriggerSettings()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level, json_output=settings.json_logs)

    if args.command == "trigger-id":
        print(derive_trigger_id(args.name, args.path))
        return 0

    if args.command == "resolve":
        try:
            result = asyncio.run(_resolve(args, HelperContext.from_settings(settings)))
        except WorkflowTriggersError as e:
            logger.error("Invalid trigger configuration", extra={"error": str(e)})
            return 2
        except (OSError, yaml.YAMLError) as e:
            logger.error("Could not load workflow", extra={"error": str(e)})
            return 1
        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
