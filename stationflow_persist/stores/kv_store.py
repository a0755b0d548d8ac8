"""
RESPONSIBILITIES
- Persist small JSON-encoded values under fixed string keys in one file.
PROCESS OVERVIEW
1. get() reads the whole document and returns the value for a key.
2. set()/delete() rewrite the document atomically under store_lock().
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from .base_store import StoreError, store_lock

DEFAULT_STORE_FILENAME = "kv_store.json"


class KeyValueStore:
    """JSON file holding ``{key: value}`` pairs."""

    def __init__(self, path: Path, *, logger: logging.Logger | None = None) -> None:
        self.path = Path(path)
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise StoreError(f"Corrupted key-value store {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise StoreError(f"Key-value store {self.path} must hold a JSON object")
        return payload

    def _write(self, payload: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with store_lock(self.path):
            payload = self._read()
            payload[key] = value
            self._write(payload)
        self.logger.info("Stored key %s in %s", key, self.path)

    def delete(self, key: str) -> bool:
        if not self.path.exists():
            return False
        with store_lock(self.path):
            payload = self._read()
            if key not in payload:
                return False
            del payload[key]
            self._write(payload)
        self.logger.info("Removed key %s from %s", key, self.path)
        return True

    def clear(self) -> None:
        """Rewrite the store as an empty document, discarding unreadable content."""

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with store_lock(self.path):
            self._write({})
        self.logger.warning("Cleared key-value store %s", self.path)
