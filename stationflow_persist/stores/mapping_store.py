"""
RESPONSIBILITIES
- Validate division mapping payloads ({division: [member, ...]}).
- Hold the active mapping, defaulting to the bundled table.
- Persist user-supplied mappings in the key-value store under a fixed key.
PROCESS OVERVIEW
1. load() -> persisted mapping when present and valid, else bundled default.
2. replace() -> validate first; only a valid payload becomes active and is persisted.
3. reset() -> forget the persisted mapping and fall back to the default.
4. snapshot() -> read-only copy handed to a processing run.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import StrictStr, TypeAdapter, ValidationError

from stationflow.config import DEFAULT_MAPPING_PATH
from stationflow.core.errors import InvalidMappingFormatError

from .base_store import StoreError, StoreLockedError
from .kv_store import KeyValueStore

MAPPING_STORE_KEY = "division_mapping"

MappingPayload = Dict[str, Tuple[str, ...]]

_PAYLOAD_ADAPTER = TypeAdapter(Dict[StrictStr, List[StrictStr]])


def validate_mapping(data: Any) -> MappingPayload:
    """Check that ``data`` is an object of string lists, preserving key order."""

    try:
        parsed = _PAYLOAD_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise InvalidMappingFormatError(
            f"Division mapping must map division names to lists of station names: {exc}"
        ) from exc
    return {division: tuple(members) for division, members in parsed.items()}


def parse_mapping_text(text: str) -> MappingPayload:
    """Parse raw JSON text into a mapping payload."""

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidMappingFormatError(f"Invalid JSON format for division mapping: {exc}") from exc
    return validate_mapping(data)


def dump_mapping(mapping: Mapping[str, Any]) -> str:
    return json.dumps({k: list(v) for k, v in mapping.items()}, ensure_ascii=False, indent=2)


class MappingStore:
    """Active division mapping with explicit load/replace operations."""

    def __init__(
        self,
        kv_store: KeyValueStore | None = None,
        *,
        default_path: Path = DEFAULT_MAPPING_PATH,
        key: str = MAPPING_STORE_KEY,
        logger: logging.Logger | None = None,
    ) -> None:
        self.kv_store = kv_store
        self.default_path = Path(default_path)
        self.key = key
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._active: MappingPayload | None = None

    def load_default(self) -> MappingPayload:
        return parse_mapping_text(self.default_path.read_text(encoding="utf-8"))

    def load(self) -> MappingPayload:
        """(Re)load the active mapping from persistence or the bundled default."""

        persisted = None
        if self.kv_store is not None:
            try:
                persisted = self.kv_store.get(self.key)
            except StoreError as exc:
                self.logger.warning("Ignoring unreadable mapping store: %s", exc)
        if persisted is not None:
            try:
                self._active = validate_mapping(persisted)
                self.logger.info("Loaded persisted division mapping (%s divisions)", len(self._active))
                return self._active
            except InvalidMappingFormatError as exc:
                self.logger.warning("Ignoring persisted division mapping: %s", exc)
        self._active = self.load_default()
        return self._active

    @property
    def table(self) -> MappingPayload:
        if self._active is None:
            return self.load()
        return self._active

    def snapshot(self) -> Mapping[str, Tuple[str, ...]]:
        return MappingProxyType(dict(self.table))

    def replace(self, data: str | Mapping[str, Any]) -> MappingPayload:
        """Validate ``data`` (JSON text or a parsed object) and make it active.

        Raises:
            InvalidMappingFormatError: The active mapping is left untouched.
        """

        payload = parse_mapping_text(data) if isinstance(data, str) else validate_mapping(data)
        if self.kv_store is not None:
            self.kv_store.set(self.key, {k: list(v) for k, v in payload.items()})
        self._active = payload
        self.logger.info("Division mapping replaced (%s divisions)", len(payload))
        return payload

    def reset(self) -> MappingPayload:
        if self.kv_store is not None:
            try:
                self.kv_store.delete(self.key)
            except StoreLockedError:
                raise
            except StoreError as exc:
                self.logger.warning("Discarding unreadable mapping store: %s", exc)
                self.kv_store.clear()
        self._active = self.load_default()
        return self._active

    def to_text(self) -> str:
        return dump_mapping(self.table)
