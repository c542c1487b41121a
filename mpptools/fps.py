"""Frame rate measurement reported once per second."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

FpsCallback = Callable[[int, int, int, int], None]

_REPORT_INTERVAL_US = 1_000_000


def _now_us() -> int:
    return time.monotonic_ns() // 1000


class FpsCalc:
    """Counts frames and reports rates through ``callback``.

    The callback receives ``(total_time, total_count, last_time, last_count)``
    with times in microseconds, at most once per elapsed second.
    """

    def __init__(
        self,
        callback: Optional[FpsCallback] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.callback = callback
        self._clock = clock or _now_us
        self._lock = threading.Lock()
        self.total_start = 0
        self.total_count = 0
        self.last_start = 0
        self.last_count = 0

    def inc(self) -> None:
        """Count one frame, reporting if a second has passed since the last report."""
        total_time = total_count = last_time = last_count = 0
        with self._lock:
            now = self._clock()
            if not self.total_count:
                self.total_start = now
                self.last_start = now
            elif now - self.last_start >= _REPORT_INTERVAL_US:
                total_time = now - self.total_start
                total_count = self.total_count
                last_time = now - self.last_start
                last_count = self.total_count - self.last_count
                self.last_start = now
                self.last_count = self.total_count
            self.total_count += 1

        if self.callback and total_time:
            self.callback(total_time, total_count, last_time, last_count)