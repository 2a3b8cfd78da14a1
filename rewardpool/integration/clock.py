"""
Time sources for the pool shell.

The engine only needs a non-decreasing integer timestamp (seconds).
"""

from __future__ import annotations

import threading
import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        ...


class SystemClock:
    """Wall clock in whole seconds, clamped so it never goes backwards."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        t = int(time.time())
        with self._lock:
            if t < self._last:
                t = self._last
            self._last = t
        return t


class ManualClock:
    """Clock driven explicitly (tests, replays)."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must be non-negative")
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def set(self, t: int) -> None:
        if t < self._now:
            raise ValueError(f"clock cannot move backwards: {t} < {self._now}")
        self._now = int(t)

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("seconds must be non-negative")
        self._now += int(seconds)
        return self._now
