"""Per-cycle counters and timings.

Counters: rows_parsed, rows_valid, rows_dropped, high_confidence.
Timings: fetch_ms, parse_ms.
"""

from typing import Dict, List
import threading


class MetricsRecorder:
    """Thread-safe in-memory recorder; the parse step runs in a worker thread."""

    def __init__(self) -> None:
        self._counters: Dict[str, int] = {}
        self._timings: Dict[str, List[float]] = {}
        self._lock = threading.Lock()

    def increment(self, key: str, value: int = 1) -> None:
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + int(value)

    def timing(self, key: str, value_ms: float) -> None:
        with self._lock:
            self._timings.setdefault(key, []).append(float(value_ms))

    def counter(self, key: str) -> int:
        with self._lock:
            return self._counters.get(key, 0)

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            timings = {
                key: {
                    "count": len(values),
                    "total_ms": sum(values),
                    "max_ms": max(values),
                }
                for key, values in self._timings.items()
                if values
            }
            return {"counters": dict(self._counters), "timings": timings}


_recorder = MetricsRecorder()


def get_metrics_recorder() -> MetricsRecorder:
    return _recorder


def reset_metrics_recorder() -> MetricsRecorder:
    """Start a fresh recorder, one per prediction cycle."""
    global _recorder
    _recorder = MetricsRecorder()
    return _recorder
