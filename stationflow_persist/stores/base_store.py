"""
RESPONSIBILITIES
- Define shared exceptions for the JSON-backed stores.
- Provide the cooperative file lock guaranteeing single-writer semantics.
PROCESS OVERVIEW
1. store_lock() acquires an in-process lock, then an exclusive ``.lock`` file.
2. Concrete stores read/modify/write their file while holding the lock.
3. The lock file is removed on exit even when the body raises.
"""

from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from stationflow.core.errors import StationFlowError

_IN_PROCESS_LOCKS: dict[Path, threading.RLock] = {}
_LOCK_REGISTRY_GUARD = threading.Lock()


class StoreError(StationFlowError):
    """Base exception type for persistence-layer failures."""


class StoreLockedError(StoreError):
    """Raised when a store file is locked by another writer."""


def _acquire_inprocess_lock(path: Path) -> threading.RLock:
    with _LOCK_REGISTRY_GUARD:
        lock = _IN_PROCESS_LOCKS.get(path)
        if lock is None:
            lock = threading.RLock()
            _IN_PROCESS_LOCKS[path] = lock
        return lock


@contextmanager
def store_lock(path: Path, timeout: float = 10) -> Iterator[None]:
    """Hold an exclusive lock on ``path`` for the duration of the block."""

    path = path.resolve()
    inproc = _acquire_inprocess_lock(path)
    if not inproc.acquire(timeout=timeout):
        raise StoreLockedError(f"Timeout acquiring in-process lock for {path}")
    lock_path = path.with_suffix(path.suffix + ".lock")
    fd: int | None = None
    try:
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError as exc:
            raise StoreLockedError(f"Store appears locked: {lock_path}") from exc
        os.write(fd, str(os.getpid()).encode("ascii"))
        yield
    finally:
        if fd is not None:
            os.close(fd)
            lock_path.unlink(missing_ok=True)
        inproc.release()
