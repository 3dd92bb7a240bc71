"""Errors raised while resolving trigger configuration."""

from __future__ import annotations


class WorkflowTriggersError(Exception):
    """Base class for errors raised by this package."""


class InvalidConfigError(WorkflowTriggersError, ValueError):
    """A trigger option has a value of the wrong shape."""


class MissingParameterError(WorkflowTriggersError, ValueError):
    """A required call parameter was not supplied."""
