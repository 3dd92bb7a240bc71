from __future__ import annotations

from workflow_triggers.digest import create_content_digest


def derive_trigger_id(name: str, workflow_relative_path: str) -> str:
    """Return the stable id of trigger ``name`` within the given workflow file."""

    return create_content_digest({"name": name, "path": workflow_relative_path})
