from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EventType(str, Enum):
    WEBHOOK = "webhook"
    SCHEDULE = "schedule"
    PUSH = "push"
    REPOSITORY_DISPATCH = "repository_dispatch"
    WORKFLOW_DISPATCH = "workflow_dispatch"
    MANUAL = "manual"


# Tags a user may list under `manualRunEvent`.
MANUAL_RUN_EVENT_TYPES: tuple[str, ...] = (
    EventType.PUSH.value,
    EventType.SCHEDULE.value,
    EventType.WEBHOOK.value,
    EventType.REPOSITORY_DISPATCH.value,
    EventType.WORKFLOW_DISPATCH.value,
)


@dataclass(frozen=True, slots=True)
class TriggerEvent:
    """The invocation context a trigger is resolved against.

    `type` is one of the :class:`EventType` values; the runtime may pass
    other strings and they are treated like any non-webhook event.
    """

    type: str
    payload: dict[str, object] = field(default_factory=dict)

    @property
    def is_webhook(self) -> bool:
        return self.type == EventType.WEBHOOK.value
