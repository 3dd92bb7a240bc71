"""Assemble everything a trigger instance is constructed with."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from workflow_triggers.errors import MissingParameterError
from workflow_triggers.helpers import HelperContext, TriggerHelpers, assemble_helpers
from workflow_triggers.workflow import (
    Workflow,
    build_context,
    extract_raw_triggers,
    load_workflow,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConstructorParams:
    """Raw options, helpers and workflow for one trigger.

    `options` are the raw workflow options; callers resolve them with
    :func:`workflow_triggers.options.resolve_general_options` once the trigger
    instance exists.
    """

    options: dict[str, Any]
    helpers: TriggerHelpers
    workflow: Workflow


def find_trigger_options(
    workflow: Workflow, name: str, global_options: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Return the options of the first trigger called ``name``, or ``{}``."""

    for trigger in extract_raw_triggers(workflow.data, global_options):
        if trigger.name == name:
            return trigger.options

    logger.debug(
        "Trigger not declared in workflow; using defaults",
        extra={"trigger": name, "workflow": workflow.relative_path},
    )
    return {}


async def build_trigger_constructor_params(
    *,
    name: str,
    cwd: str | Path | None = None,
    workflow_path: str | Path | None = None,
    workflow: Workflow | None = None,
    global_options: Mapping[str, Any] | None = None,
    options: Mapping[str, Any] | None = None,
    context: HelperContext | None = None,
) -> ConstructorParams:
    """Build the constructor parameters for trigger ``name``.

    A given ``workflow`` is used as-is; otherwise it is loaded from
    ``workflow_path`` relative to ``cwd`` (default: the current directory).
    Explicit ``options`` are used verbatim instead of the workflow's.

    Raises:
        MissingParameterError: If neither ``workflow`` nor ``workflow_path``
            is given.
    """

    if workflow is not None:
        the_workflow = workflow
    elif workflow_path:
        the_workflow = await load_workflow(
            path=workflow_path,
            cwd=cwd or os.getcwd(),
            context=build_context(),
        )
    else:
        raise MissingParameterError("Missing parameter: workflow or workflow_path is required")

    if options is not None:
        trigger_options = dict(options)
    else:
        trigger_options = find_trigger_options(the_workflow, name, global_options)

    log_level = trigger_options.get("logLevel") or None

    return ConstructorParams(
        options=trigger_options,
        helpers=assemble_helpers(
            name, the_workflow.relative_path, log_level, context=context
        ),
        workflow=the_workflow,
    )
