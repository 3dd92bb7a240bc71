"""Content digests used for trigger ids and item deduplication keys."""

from __future__ import annotations

import base64
import hashlib
import json
from typing import Any


def _canonical_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    # Key order of mappings must not change the digest.
    text = json.dumps(
        value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
    )
    return text.encode("utf-8")


def create_content_digest(value: Any) -> str:
    """Return a deterministic md5 hex digest of ``value``.

    Strings are hashed as their UTF-8 text, bytes as-is, and everything else
    via canonical JSON.
    """

    return hashlib.md5(_canonical_bytes(value)).hexdigest()


def format_binary(data: bytes) -> str:
    """Render binary content as base64 text."""

    return base64.b64encode(data).decode("ascii")
