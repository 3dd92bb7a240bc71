"""Workflow trigger option resolution.

Resolves the effective options of a workflow trigger and derives:
- a stable trigger id from (name, workflow path)
- per-item deduplication keys
"""

__version__ = "0.1.0"

from workflow_triggers.errors import (
    InvalidConfigError,
    MissingParameterError,
    WorkflowTriggersError,
)
from workflow_triggers.events import EventType, TriggerEvent
from workflow_triggers.helpers import HelperContext, TriggerHelpers, assemble_helpers
from workflow_triggers.identity import derive_trigger_id
from workflow_triggers.options import FinalTriggerOptions, resolve_general_options
from workflow_triggers.params import ConstructorParams, build_trigger_constructor_params

__all__ = [
    "__version__",
    "ConstructorParams",
    "EventType",
    "FinalTriggerOptions",
    "HelperContext",
    "InvalidConfigError",
    "MissingParameterError",
    "TriggerEvent",
    "TriggerHelpers",
    "WorkflowTriggersError",
    "assemble_helpers",
    "build_trigger_constructor_params",
    "derive_trigger_id",
    "resolve_general_options",
]
