"""
Most-recent-value-wins hand-off between a frame processing thread and a UI thread.

There is no queue: a newer value replaces one that has not been taken yet,
and the replaced value is simply dropped.
"""

from __future__ import annotations

import threading
from typing import Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class LatestValue(Generic[T]):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._pending = False
        self._version = 0
        self.dropped = 0

    def put(self, value: T) -> int:
        """Publish ``value`` and return its version number."""
        with self._lock:
            if self._pending:
                self.dropped += 1
            self._value = value
            self._pending = True
            self._version += 1
            return self._version

    def take(self) -> Optional[T]:
        """Return the pending value and clear it, or None when nothing is pending."""
        with self._lock:
            if not self._pending:
                return None
            value, self._value = self._value, None
            self._pending = False
            return value

    def peek(self) -> Tuple[Optional[T], int]:
        """Return (pending value or None, version of the last put) without clearing."""
        with self._lock:
            return (self._value if self._pending else None), self._version

    @property
    def version(self) -> int:
        with self._lock:
            return self._version
