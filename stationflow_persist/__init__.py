"""
Persistence facade exposing the division mapping store.
"""

from __future__ import annotations

import os

from .stores.base_store import StoreError, StoreLockedError
from .stores.kv_store import DEFAULT_STORE_FILENAME, KeyValueStore
from .stores.mapping_store import (
    MAPPING_STORE_KEY,
    MappingStore,
    dump_mapping,
    parse_mapping_text,
    validate_mapping,
)
from .utils.log import get_logger
from .utils.paths import store_file_path


def init_mapping_store(root: str | os.PathLike[str] | None = None) -> MappingStore:
    """Build a MappingStore persisted under ``<root>/store/kv_store.json``."""

    kv = KeyValueStore(store_file_path(DEFAULT_STORE_FILENAME, root), logger=get_logger("kv_store"))
    return MappingStore(kv, logger=get_logger("mapping_store"))


__all__ = [
    "KeyValueStore",
    "MAPPING_STORE_KEY",
    "MappingStore",
    "StoreError",
    "StoreLockedError",
    "dump_mapping",
    "init_mapping_store",
    "parse_mapping_text",
    "validate_mapping",
]
