"""Observability: in-process counters/timers and summary logging."""

import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


class Metrics:
    """Dict-based metrics collector for counters and timers.

    Counter names are dotted ("cache.hit", "sync.artifact.failed"). Labels
    passed as keyword arguments are folded into the name so a single
    dict stays flat and cheap to dump.
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._timers: dict[str, list[float]] = {}

    @staticmethod
    def _key(name: str, labels: dict) -> str:
        if not labels:
            return name
        parts = ",".join(f"{k}={labels[k]}" for k in sorted(labels))
        return f"{name}{{{parts}}}"

    def counter(self, name: str, value: int = 1, **labels):
        """Increment a counter."""
        key = self._key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def get(self, name: str, **labels) -> int:
        return self._counters.get(self._key(name, labels), 0)

    @contextmanager
    def timer(self, name: str):
        """Time the wrapped block and record the duration in seconds."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self._timers.setdefault(name, []).append(time.perf_counter() - start)

    def summary(self) -> dict[str, Any]:
        timers = {}
        for name, durations in self._timers.items():
            timers[name] = {
                "count": len(durations),
                "avg": sum(durations) / len(durations) if durations else 0.0,
                "max": max(durations, default=0.0),
            }
        return {"counters": dict(self._counters), "timers": timers}

    def reset(self):
        self._counters.clear()
        self._timers.clear()


metrics = Metrics()


def log_run_summary():
    """Log the current metrics summary via structlog."""
    logger.info("run_summary", **metrics.summary())
