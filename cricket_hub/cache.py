"""In-process TTL cache for read-through queries.

Keys follow the colon-delimited convention documented in
``cricket_hub.content.keys`` so write paths can bust related entries with a
single ``invalidate(substring)`` call.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    stored_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.stored_at < self.ttl


class TTLCache:
    """Key/value store with per-entry expiry.

    Values are returned as stored (no copy); callers treat them as read-only.
    Expired entries are evicted lazily, on the read that finds them stale.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def set(self, key: str, value: Any, ttl: float = DEFAULT_TTL_SECONDS) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock(), ttl=ttl)

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        if not entry.is_fresh(self._clock()):
            del self._entries[key]
            return default
        return entry.value

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def invalidate(self, substring: str) -> int:
        """Drop every key containing *substring*; returns how many were dropped."""
        doomed = [key for key in self._entries if substring in key]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()

    def entry(self, key: str) -> CacheEntry | None:
        """Physical lookup, no expiry check."""
        return self._entries.get(key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
