"""Per-request timing for outbound calls.

A chat request spends most of its time in two network calls: the page
fetch (on a cache miss) and the LLM completion. The tracker records both
so the ``chat_request`` log line shows where the latency went.

Example:
    with timer("llm_call"):
        reply = responder.generate(message, record)

    log_interaction("chat_request", {"timings": get_timings()})
"""

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from flask import g, has_request_context

__all__ = ["timer", "get_timings", "reset_timings", "TimingTracker"]


class TimingTracker:
    """Track timing for multiple operations within a request."""

    def __init__(self):
        self.timings: Dict[str, Dict[str, Any]] = {}

    def record(self, operation: str, duration: float) -> None:
        stats = self.timings.setdefault(
            operation,
            {"count": 0, "total_seconds": 0.0, "max_seconds": 0.0},
        )
        stats["count"] += 1
        stats["total_seconds"] += duration
        stats["max_seconds"] = max(stats["max_seconds"], duration)

    @contextmanager
    def measure(self, operation: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record(operation, time.perf_counter() - start)

    def get_all(self) -> Dict[str, Any]:
        """All timings rounded for JSON, plus an outbound-vs-app summary."""
        result: Dict[str, Any] = {}
        for op, stats in self.timings.items():
            result[op] = {
                "count": stats["count"],
                "total_seconds": round(stats["total_seconds"], 3),
                "max_seconds": round(stats["max_seconds"], 3),
            }

        if result:
            outbound = sum(
                s["total_seconds"]
                for op, s in self.timings.items()
                if "llm" in op or "fetch" in op
            )
            total = sum(s["total_seconds"] for s in self.timings.values())
            result["__summary__"] = {
                "total_seconds": round(total, 3),
                "outbound_seconds": round(outbound, 3),
                "outbound_percent": round(outbound / total * 100, 1) if total > 0 else 0,
            }
        return result

    def reset(self) -> None:
        self.timings.clear()


# Tracker used outside a Flask request (CLI tools, tests)
_tracker: Optional[TimingTracker] = None


def _get_tracker() -> TimingTracker:
    """Request-scoped tracker on flask.g, or a module-level one outside requests."""
    if has_request_context():
        if not hasattr(g, "timing_tracker"):
            g.timing_tracker = TimingTracker()
        return g.timing_tracker

    global _tracker
    if _tracker is None:
        _tracker = TimingTracker()
    return _tracker


@contextmanager
def timer(operation: str) -> Iterator[None]:
    """Time the enclosed block under ``operation``."""
    with _get_tracker().measure(operation):
        yield


def get_timings() -> Dict[str, Any]:
    return _get_tracker().get_all()


def reset_timings() -> None:
    _get_tracker().reset()
