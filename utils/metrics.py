import threading
from collections import defaultdict
from typing import Any, Dict, Tuple

_LOCK = threading.Lock()
_COUNTERS: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], float] = defaultdict(float)
_TIMINGS: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], Dict[str, float]] = {}


def _key(name: str, labels: Dict[str, Any]) -> Tuple[str, Tuple[Tuple[str, str], ...]]:
    return name, tuple(sorted((k, str(v)) for k, v in labels.items()))


def incr(name: str, amount: float = 1, **labels: Any) -> None:
    with _LOCK:
        _COUNTERS[_key(name, labels)] += amount


def observe_ms(name: str, value_ms: float, **labels: Any) -> None:
    key = _key(name, labels)
    with _LOCK:
        stats = _TIMINGS.get(key)
        if stats is None:
            stats = {"count": 0.0, "sum_ms": 0.0, "max_ms": 0.0}
            _TIMINGS[key] = stats
        stats["count"] += 1
        stats["sum_ms"] += float(value_ms)
        stats["max_ms"] = max(stats["max_ms"], float(value_ms))


def snapshot() -> dict:
    with _LOCK:
        counters = [
            {"name": name, "labels": dict(labels), "value": value}
            for (name, labels), value in sorted(_COUNTERS.items())
        ]
        timings = [
            {"name": name, "labels": dict(labels), **stats}
            for (name, labels), stats in sorted(_TIMINGS.items())
        ]
    return {"counters": counters, "timings": timings}


def reset() -> None:
    with _LOCK:
        _COUNTERS.clear()
        _TIMINGS.clear()
