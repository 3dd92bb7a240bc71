"""Capabilities handed to a trigger implementation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import requests

from workflow_triggers.cache import CacheFactory, JsonFileCache
from workflow_triggers.clients import FeedParser, build_http_session
from workflow_triggers.config import TriggerSettings
from workflow_triggers.digest import create_content_digest, format_binary
from workflow_triggers.identity import derive_trigger_id
from workflow_triggers.logging import get_trigger_logger, to_logging_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HelperContext:
    """Process-wide collaborators, passed explicitly instead of read from globals.

    `default_log_level` is what a trigger logger gets when neither the
    workflow nor the caller asks for a specific level.
    """

    default_log_level: str | int
    cache_factory: CacheFactory
    http: requests.Session
    feed_parser: FeedParser
    app_name: str = "Workflow"

    @staticmethod
    def from_settings(settings: TriggerSettings) -> HelperContext:
        session = build_http_session(settings.user_agent)
        return HelperContext(
            default_log_level=settings.log_level,
            cache_factory=CacheFactory(settings.cache_path),
            http=session,
            feed_parser=FeedParser(session, timeout=settings.http_timeout_seconds),
            app_name=settings.app_name,
        )


@dataclass(frozen=True, slots=True)
class TriggerHelpers:
    """The bundle a single trigger instance may use.

    Not shared between triggers: `cache` and `log` are scoped to this
    trigger's name (and, for the cache, its id).
    """

    trigger_id: str
    create_content_digest: Callable[[Any], str]
    format_binary: Callable[[bytes], str]
    cache: JsonFileCache
    log: logging.Logger
    http: requests.Session
    feed_parser: FeedParser


_default_context: HelperContext | None = None
_default_context_lock = threading.Lock()


def default_helper_context() -> HelperContext:
    """Build (once) the context derived from environment settings."""

    global _default_context
    with _default_context_lock:
        if _default_context is None:
            _default_context = HelperContext.from_settings(TriggerSettings())
        return _default_context


def cache_namespace(name: str, trigger_id: str) -> str:
    return f"trigger-{name}-{trigger_id}"


def effective_log_level(requested: object, default: str | int) -> str | int:
    """The level ``requested`` names, or ``default`` when it names none.

    Workflow files may carry any value under `logLevel`; unknown ones fall
    back to the default with a warning.
    """

    if not requested:
        return default
    try:
        return to_logging_level(requested)
    except ValueError:
        logger.warning(
            "Unknown trigger log level; using default",
            extra={"log_level": repr(requested), "default": default},
        )
        return default


def assemble_helpers(
    name: str,
    workflow_relative_path: str,
    log_level: object = None,
    *,
    context: HelperContext | None = None,
) -> TriggerHelpers:
    """Build the helper bundle for trigger ``name`` in the given workflow.

    Args:
        name: Trigger name as written in the workflow file.
        workflow_relative_path: Workflow path relative to the working directory.
        log_level: Explicit level for the trigger logger; falls back to the
            context's default level.
        context: Shared collaborators; defaults to one built from settings.
    """

    ctx = context or default_helper_context()
    trigger_id = derive_trigger_id(name, workflow_relative_path)
    log = get_trigger_logger(
        name,
        effective_log_level(log_level, ctx.default_log_level),
        app_name=ctx.app_name,
    )
    return TriggerHelpers(
        trigger_id=trigger_id,
        create_content_digest=create_content_digest,
        format_binary=format_binary,
        cache=ctx.cache_factory.get_cache(cache_namespace(name, trigger_id)),
        log=log,
        http=ctx.http,
        feed_parser=ctx.feed_parser,
    )
