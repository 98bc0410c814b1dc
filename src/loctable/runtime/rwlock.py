"""Readers-writer lock for the LocalizationTable handle cache.

Cache hits are reads and vastly outnumber cache fills, so readers share the
lock while a writer (cache fill, eviction, clear) gets exclusive access.
A waiting writer blocks new readers, so a steady stream of lookups cannot
starve a fill.

A thread may nest read() freely. It may not take write() while it holds
either side of the lock: that would wait on itself forever, so it raises
RuntimeError instead.

Python 3.13+.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # shared
        >>> with lock.write():
        ...     pass  # exclusive
    """

    __slots__ = ("_condition", "_read_depth", "_writer", "_writers_waiting")

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        # Thread id -> nested read() depth; one entry per reading thread
        self._read_depth: dict[int, int] = {}
        self._writer: int | None = None
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Generator[None]:
        """Hold the lock for shared access.

        Raises:
            RuntimeError: If this thread holds the write lock
        """
        thread_id = threading.get_ident()
        with self._condition:
            depth = self._read_depth.get(thread_id, 0)
            if depth == 0:
                if self._writer == thread_id:
                    msg = "Cannot take a read lock while holding the write lock"
                    raise RuntimeError(msg)
                self._condition.wait_for(
                    lambda: self._writer is None and self._writers_waiting == 0
                )
            self._read_depth[thread_id] = depth + 1
        try:
            yield
        finally:
            with self._condition:
                remaining = self._read_depth.pop(thread_id) - 1
                if remaining:
                    self._read_depth[thread_id] = remaining
                elif not self._read_depth:
                    self._condition.notify_all()

    @contextmanager
    def write(self) -> Generator[None]:
        """Hold the lock for exclusive access.

        Raises:
            RuntimeError: If this thread already holds the read or write lock
        """
        thread_id = threading.get_ident()
        with self._condition:
            if thread_id in self._read_depth:
                msg = "Cannot upgrade a read lock to the write lock; release it first"
                raise RuntimeError(msg)
            if self._writer == thread_id:
                msg = "Write lock is not reentrant"
                raise RuntimeError(msg)
            self._writers_waiting += 1
            try:
                self._condition.wait_for(lambda: self._writer is None and not self._read_depth)
                self._writer = thread_id
            finally:
                self._writers_waiting -= 1
                if self._writer != thread_id:
                    # Interrupted while waiting; readers held back for us may proceed
                    self._condition.notify_all()
        try:
            yield
        finally:
            with self._condition:
                self._writer = None
                self._condition.notify_all()
