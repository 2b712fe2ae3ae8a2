from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from math import sqrt
from time import perf_counter
from typing import Dict


@dataclass(slots=True)
class TimingStats:
    """Numerical aggregates for a timing label."""

    count: float = 0.0
    total_ms: float = 0.0
    max_ms: float = 0.0
    avg_ms: float = 0.0
    stddev_ms: float = 0.0
    _mean_ms: float = 0.0
    _m2: float = 0.0

    def update(self, elapsed_ms: float) -> None:
        value = float(elapsed_ms)
        self.count += 1.0
        self.total_ms += value
        if value > self.max_ms:
            self.max_ms = value

        # Welford running variance
        delta = value - self._mean_ms
        self._mean_ms += delta / self.count
        self._m2 += delta * (value - self._mean_ms)

        variance = self._m2 / (self.count - 1.0) if self.count > 1.0 else 0.0
        self.stddev_ms = sqrt(variance) if variance > 0.0 else 0.0
        self.avg_ms = self._mean_ms

    def snapshot(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "total_ms": self.total_ms,
            "max_ms": self.max_ms,
            "avg_ms": self.avg_ms,
            "stddev_ms": self.stddev_ms,
        }


class _MetricsRegistry:
    """Thread-safe in-process metrics registry.

    Holds per-label timing stats (backend round-trips) and plain counters
    (forwarded actions, backend failures, rejected batches).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timings: Dict[str, TimingStats] = {}
        self._counters: Dict[str, float] = {}

    def record(self, label: str, elapsed_ms: float) -> None:
        if not label:
            return
        with self._lock:
            entry = self._timings.setdefault(label, TimingStats())
            entry.update(elapsed_ms)

    def snapshot(self, reset: bool = False) -> Dict[str, Dict[str, float]]:
        with self._lock:
            data = {label: stats.snapshot() for label, stats in self._timings.items()}
            if reset:
                self._timings.clear()
            return data

    def reset(self) -> None:
        with self._lock:
            self._timings.clear()
            self._counters.clear()

    # --- Counters ---
    def inc(self, label: str, amount: float = 1.0) -> None:
        if not label:
            return
        with self._lock:
            self._counters[label] = self._counters.get(label, 0.0) + float(amount)

    def counters_snapshot(self, reset: bool = False) -> Dict[str, float]:
        with self._lock:
            data = dict(self._counters)
            if reset:
                self._counters.clear()
            return data


metrics_registry = _MetricsRegistry()


_INSTRUMENTATION_ENABLED: bool = True


def set_instrumentation_enabled(enabled: bool) -> None:
    global _INSTRUMENTATION_ENABLED
    _INSTRUMENTATION_ENABLED = bool(enabled)


def instrumentation_enabled() -> bool:
    return _INSTRUMENTATION_ENABLED


@contextmanager
def timer(label: str):
    """Context manager to time a code block and record it under `label`."""
    if not instrumentation_enabled():
        yield
        return
    t0 = perf_counter()
    try:
        yield
    finally:
        dt_ms = (perf_counter() - t0) * 1000.0
        metrics_registry.record(label, dt_ms)


def inc_counter(label: str, amount: float = 1.0) -> None:
    """Increment a counter metric identified by `label`."""

    if instrumentation_enabled():
        metrics_registry.inc(label, amount)


def get_metrics(reset: bool = False) -> Dict[str, Dict[str, float]]:
    """Return recorded timing metrics, optionally resetting the registry."""

    return metrics_registry.snapshot(reset=reset)


def get_counters(reset: bool = False) -> Dict[str, float]:
    """Return counter metrics, optionally clearing stored values."""

    return metrics_registry.counters_snapshot(reset=reset)


__all__ = [
    "timer",
    "inc_counter",
    "get_metrics",
    "get_counters",
    "metrics_registry",
    "set_instrumentation_enabled",
    "instrumentation_enabled",
]
