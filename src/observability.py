"""Observability: in-process counters and timers for predictions and feed fetches."""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


@dataclass
class TimerStats:
    """Running count, total and max for one timer."""

    count: int = 0
    total: float = 0.0
    max: float = 0.0

    def add(self, duration: float) -> None:
        self.count += 1
        self.total += duration
        self.max = max(self.max, duration)


class Metrics:
    """Dict-based metrics collector for counters and timers."""

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._timers: dict[str, TimerStats] = {}
        self._lock = threading.Lock()

    def counter(self, name: str, value: int = 1):
        """Increment a counter by the given value."""
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value

    @contextmanager
    def timer(self, name: str):
        """Time the enclosed block and store the duration in seconds."""
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            with self._lock:
                self._timers.setdefault(name, TimerStats()).add(duration)

    def summary(self) -> dict[str, Any]:
        with self._lock:
            counters = dict(self._counters)
            timer_summary = {
                name: {
                    "count": stats.count,
                    "total": stats.total,
                    "avg": stats.total / stats.count,
                    "max": stats.max,
                }
                for name, stats in self._timers.items()
            }

        return {"counters": counters, "timers": timer_summary}

    def reset(self):
        with self._lock:
            self._counters.clear()
            self._timers.clear()


# Module-level singleton
metrics = Metrics()


def log_run_summary():
    """Log the current metrics summary via structlog."""
    logger.info("run_summary", **metrics.summary())
