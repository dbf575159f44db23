"""
Model-call metrics kept in process memory.

Keys follow `model.<flow>.<model>.<outcome>` for attempts and
`dispatch.<flow>.fallback` for tier switches. GET /metrics returns get_snapshot().
"""

import time
from collections import defaultdict, deque
from contextlib import asynccontextmanager
from typing import Any, Deque, Dict, Sequence

WINDOW = 500  # duration samples kept per key

_counters: Dict[str, int] = defaultdict(int)
_durations: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=WINDOW))


def inc(name: str, value: int = 1) -> None:
    _counters[name] += value


def observe(name: str, value: float) -> None:
    """Add one sample to the rolling window for `name`."""
    _durations[name].append(value)


def _percentile(ordered: Sequence[float], fraction: float) -> float:
    index = min(int(len(ordered) * fraction), len(ordered) - 1)
    return round(ordered[index], 1)


@asynccontextmanager
async def track_duration(flow: str, model: str):
    """
    Time one model attempt and count its outcome.

        async with track_duration("career_chat", "gemini-2.5-flash"):
            payload = await client.generate(prompt, model)
    """
    key = f"model.{flow}.{model}"
    started = time.monotonic()
    outcome = "error"
    try:
        yield
        outcome = "success"
    finally:
        observe(f"{key}.duration_ms", (time.monotonic() - started) * 1000)
        inc(f"{key}.{outcome}")


def get_snapshot() -> Dict[str, Any]:
    histograms = {}
    for name, samples in _durations.items():
        if not samples:
            continue
        ordered = sorted(samples)
        histograms[name] = {
            "count": len(ordered),
            "p50": _percentile(ordered, 0.5),
            "p95": _percentile(ordered, 0.95),
            "max": round(ordered[-1], 1),
        }
    return {"counters": dict(_counters), "histograms": histograms}


def reset() -> None:
    """Clear everything; tests call this between cases."""
    _counters.clear()
    _durations.clear()
