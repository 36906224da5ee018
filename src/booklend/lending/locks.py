# ABOUTME: Per-key mutual exclusion for check-then-write sequences on one isbn.
# ABOUTME: Serializes writers inside one process; other processes are not covered.

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """A lazily-created lock per key.

    Locks are never discarded; the key space (isbns in one small catalog)
    stays small.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
        with lock:
            yield
