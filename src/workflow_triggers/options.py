"""Resolve the general options every trigger obeys.

Resolution is an ordered merge of plain mappings, later layers winning:

1. built-in defaults (some depend on the invocation event)
2. the trigger implementation's own `config`
3. the user's `config` block from the workflow file
4. normalisation passes: `manualRunEvent` shape, the debug cascade, and the
   choice of item-key extractor

Workflow files spell option keys in camelCase; the resolved
:class:`FinalTriggerOptions` exposes them as snake_case attributes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from workflow_triggers.digest import create_content_digest
from workflow_triggers.errors import InvalidConfigError
from workflow_triggers.events import MANUAL_RUN_EVENT_TYPES, EventType, TriggerEvent

logger = logging.getLogger(__name__)

ItemKeyFn = Callable[[Mapping[str, Any]], str]

DEBUG_MANUAL_RUN_EVENTS: tuple[str, ...] = (
    EventType.PUSH.value,
    EventType.REPOSITORY_DISPATCH.value,
    EventType.WORKFLOW_DISPATCH.value,
)

# Checked in order; a later field overwrites an earlier one.
ITEM_KEY_FIELDS: tuple[str, ...] = ("id", "key", "guid")

_FIELD_NAMES: dict[str, str] = {
    "every": "every",
    "manualRunEvent": "manual_run_event",
    "debug": "debug",
    "shouldDeduplicate": "should_deduplicate",
    "skipSchedule": "skip_schedule",
    "skipFirst": "skip_first",
    "force": "force",
    "active": "active",
    "buildOutputsOnError": "build_outputs_on_error",
    "skipOnError": "skip_on_error",
    "timeZone": "time_zone",
    "logLevel": "log_level",
}


class TriggerInstance(Protocol):
    """What the resolver reads from a trigger implementation.

    Both attributes are optional on real instances: `config` may be missing
    or None, and `get_item_key` may not be defined at all.
    """

    config: Mapping[str, Any] | None

    def get_item_key(self, item: Mapping[str, Any]) -> Any: ...


class ItemKeySource(str, Enum):
    FIELDS = "fields"
    INSTANCE = "instance"


@dataclass(slots=True)
class FinalTriggerOptions:
    every: int | float | str
    manual_run_event: list[str]
    debug: bool
    should_deduplicate: bool
    skip_schedule: bool
    skip_first: bool
    force: bool
    active: bool
    build_outputs_on_error: bool
    skip_on_error: bool
    time_zone: str
    get_item_key: ItemKeyFn
    item_key_source: ItemKeySource = ItemKeySource.FIELDS
    log_level: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """The option mapping in workflow-file spelling, without the extractor."""

        out: dict[str, Any] = dict(self.extra)
        for key, attr in _FIELD_NAMES.items():
            value = getattr(self, attr)
            if key == "logLevel" and value is None:
                continue
            out[key] = list(value) if key == "manualRunEvent" else value
        return out


def default_options(event: TriggerEvent) -> dict[str, Any]:
    return {
        # 0: run on every invocation of the workflow.
        "every": 0,
        # Webhook payloads are pushed once per delivery.
        "shouldDeduplicate": not event.is_webhook,
        "manualRunEvent": [],
        "skipSchedule": False,
        "debug": False,
        "skipFirst": False,
        "force": False,
        "active": True,
        "buildOutputsOnError": False,
        "skipOnError": False,
        "timeZone": "UTC",
    }


def normalize_manual_run_event(value: Any) -> list[str]:
    """Coerce `manualRunEvent` to a list of event tags."""

    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    allowed = ", ".join(f'"{t}"' for t in MANUAL_RUN_EVENT_TYPES)
    raise InvalidConfigError(
        f"Invalid config event value {value!r}, you should use one of {allowed}"
    )


def apply_debug_cascade(options: dict[str, Any]) -> dict[str, Any]:
    """Debug mode logs everything and allows every common manual re-run event."""

    if not options.get("debug"):
        return options
    return {
        **options,
        "logLevel": "debug",
        "manualRunEvent": list(DEBUG_MANUAL_RUN_EVENTS),
    }


def default_item_key(item: Mapping[str, Any]) -> str:
    """Digest of the item's `guid`/`key`/`id`, or of the whole item."""

    key: Any = ""
    for name in ITEM_KEY_FIELDS:
        value = item.get(name)
        if value:
            key = value
    if key:
        return create_content_digest(key)
    return create_content_digest(item)


def _instance_item_key(extractor: Callable[[Mapping[str, Any]], Any]) -> ItemKeyFn:
    def get_item_key(item: Mapping[str, Any]) -> str:
        return create_content_digest(extractor(item))

    return get_item_key


def select_item_key_source(
    *, should_deduplicate: bool, has_instance_extractor: bool
) -> ItemKeySource:
    if should_deduplicate and has_instance_extractor:
        return ItemKeySource.INSTANCE
    return ItemKeySource.FIELDS


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {}


def resolve_general_options(
    trigger_instance: TriggerInstance | object,
    trigger_options: Mapping[str, Any] | None,
    event: TriggerEvent,
) -> FinalTriggerOptions:
    """Resolve the options a trigger runtime will obey.

    Args:
        trigger_instance: The trigger implementation; its optional `config`
            supplies factory defaults and its optional `get_item_key` supplies
            a custom deduplication key.
        trigger_options: Raw options of this trigger from the workflow file;
            only its `config` block is read.
        event: The invocation context.

    Raises:
        InvalidConfigError: If `manualRunEvent` is neither a string nor a list.
    """

    instance_config = _as_mapping(getattr(trigger_instance, "config", None))
    user_config = _as_mapping((trigger_options or {}).get("config"))

    options: dict[str, Any] = {**default_options(event), **instance_config, **user_config}
    options["manualRunEvent"] = normalize_manual_run_event(options.get("manualRunEvent"))
    options = apply_debug_cascade(options)

    instance_extractor = getattr(trigger_instance, "get_item_key", None)
    source = select_item_key_source(
        should_deduplicate=bool(options["shouldDeduplicate"]),
        has_instance_extractor=callable(instance_extractor),
    )
    if source is ItemKeySource.INSTANCE:
        get_item_key = _instance_item_key(instance_extractor)
    else:
        get_item_key = default_item_key

    extra = {k: v for k, v in options.items() if k not in _FIELD_NAMES}
    fields = {attr: options.get(key) for key, attr in _FIELD_NAMES.items()}
    resolved = FinalTriggerOptions(
        **fields,
        get_item_key=get_item_key,
        item_key_source=source,
        extra=extra,
    )
    logger.debug(
        "Resolved trigger options",
        extra={"options": resolved.to_dict(), "item_key_source": source.value},
    )
    return resolved
