"""JSON-file backed caches, one file per namespace."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote

logger = logging.getLogger(__name__)


class JsonFileCache:
    """A small key/value store persisted as a single JSON object.

    Every call reads the file, so two handles on the same path always see
    each other's writes.
    """

    def __init__(self, path: Path, *, namespace: str = "") -> None:
        self._path = path
        self.namespace = namespace

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(
                "Cache file is not valid JSON; treating as empty",
                extra={"path": str(self._path)},
            )
            return {}

        if not isinstance(raw, dict):
            logger.warning(
                "Cache file has unexpected shape; treating as empty",
                extra={"path": str(self._path)},
            )
            return {}
        return raw

    def _save(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:  # noqa: A003 (cache API)
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return False
        del data[key]
        self._save(data)
        return True

    def keys(self) -> list[str]:
        return sorted(self._load())

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()


class CacheFactory:
    """Hands out caches under ``base_dir``; equal namespaces share a file."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir

    def path_for(self, namespace: str) -> Path:
        # Quoting keeps distinct namespaces on distinct filenames.
        return self._base_dir / f"{quote(namespace, safe='-_.')}.json"

    def get_cache(self, namespace: str) -> JsonFileCache:
        return JsonFileCache(self.path_for(namespace), namespace=namespace)
