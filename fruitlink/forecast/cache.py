"""
Time-to-live memo with an injected clock.

Owned by whoever needs it (one per ``ForecastEngine``, one per insight
service) rather than living at module scope, so several engines can coexist
and tests can move time forward by swapping the clock.

Entries are checked lazily: an expired entry is dropped on the next ``get``
for its key. ``purge_expired()`` sweeps everything at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Hashable, Optional, TypeVar

from fruitlink.utils.time_utils import Clock, monotonic_clock

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class _Entry(Generic[V]):
    value: V
    stored_at: float


class TTLCache(Generic[K, V]):
    """Key → value memo whose entries expire ``ttl_seconds`` after storage.

    An entry stored at time ``t`` is served while ``now - t < ttl_seconds``.

    Args:
        ttl_seconds: Lifetime of an entry; must be positive.
        clock: Time source in seconds. Defaults to ``time.monotonic``.

    Raises:
        ValueError: If ``ttl_seconds`` is not positive.
    """

    def __init__(self, ttl_seconds: float, clock: Clock = monotonic_clock) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}.")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[K, _Entry[V]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]

    def get(self, key: K) -> Optional[V]:
        """Return the live value for ``key``, or ``None`` if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return entry.value

    def put(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``, stamped with the current time."""
        self._entries[key] = _Entry(value=value, stored_at=self._clock())

    def invalidate(self, key: K) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        stale = [k for k, e in self._entries.items() if now - e.stored_at >= self.ttl_seconds]
        for key in stale:
            del self._entries[key]
        return len(stale)
