"""
Lightweight runtime metrics for health/observability.

In-process counters per cache name plus a rolling one-hour window of
upstream errors.  Exposed by ``GET /api/health``.
"""

from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from typing import Deque, Dict


class _RuntimeMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits: Dict[str, int] = defaultdict(int)
        self._misses: Dict[str, int] = defaultdict(int)
        self._upstream_calls = 0
        self._error_timestamps: Deque[float] = deque()

    def record_cache_access(self, cache: str, hit: bool) -> None:
        with self._lock:
            if hit:
                self._hits[cache] += 1
            else:
                self._misses[cache] += 1

    def record_upstream_call(self) -> None:
        with self._lock:
            self._upstream_calls += 1

    def record_error(self, ts: float | None = None) -> None:
        now = ts if ts is not None else time.time()
        with self._lock:
            self._error_timestamps.append(now)
            self._prune_locked(now)

    def snapshot(self) -> Dict[str, object]:
        now = time.time()
        with self._lock:
            self._prune_locked(now)
            caches = {}
            for name in sorted(set(self._hits) | set(self._misses)):
                hits, misses = self._hits[name], self._misses[name]
                total = hits + misses
                caches[name] = {
                    "hits": hits,
                    "misses": misses,
                    "hit_rate": round(hits / total, 4) if total else 0.0,
                }
            return {
                "caches": caches,
                "upstream_calls": self._upstream_calls,
                "errors_last_hour": len(self._error_timestamps),
            }

    def reset_for_tests(self) -> None:
        with self._lock:
            self._hits.clear()
            self._misses.clear()
            self._upstream_calls = 0
            self._error_timestamps.clear()

    def _prune_locked(self, now: float) -> None:
        cutoff = now - 3600.0
        while self._error_timestamps and self._error_timestamps[0] < cutoff:
            self._error_timestamps.popleft()


_METRICS = _RuntimeMetrics()


def record_cache_access(cache: str, hit: bool) -> None:
    _METRICS.record_cache_access(cache, hit)


def record_upstream_call() -> None:
    _METRICS.record_upstream_call()


def record_error(ts: float | None = None) -> None:
    _METRICS.record_error(ts)


def metrics_snapshot() -> Dict[str, object]:
    return _METRICS.snapshot()


def reset_metrics_for_tests() -> None:
    _METRICS.reset_for_tests()
