from __future__ import annotations

import threading
from typing import Dict


class Counter:
    """Process-wide named counter.

    Only ever goes up (short of an explicit reset); safe to bump from any
    thread.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()
        self._value = 0

    def add(self, delta: int) -> int:
        if delta < 0:
            raise ValueError(f"counter {self.name!r} cannot be decremented (delta={delta})")
        with self._lock:
            self._value += delta
            return self._value

    def increment(self) -> int:
        return self.add(1)

    def get(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    def __repr__(self) -> str:
        return f"Counter({self.name!r}, value={self.get()})"


_COUNTERS: Dict[str, Counter] = {}
_REGISTRY_LOCK = threading.Lock()


def new_counter(name: str) -> Counter:
    """Return the counter registered under ``name``, creating it on first use."""
    if not isinstance(name, str) or not name:
        raise ValueError("Counter name must be a non-empty string")
    with _REGISTRY_LOCK:
        counter = _COUNTERS.get(name)
        if counter is None:
            counter = Counter(name)
            _COUNTERS[name] = counter
        return counter


def get_counter(name: str) -> Counter:
    with _REGISTRY_LOCK:
        return _COUNTERS[name]


def snapshot() -> Dict[str, int]:
    with _REGISTRY_LOCK:
        counters = list(_COUNTERS.values())
    return {c.name: c.get() for c in counters}
