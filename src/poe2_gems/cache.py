"""
In-process result cache for parsed gem records.

Entries live for a fixed time-to-live measured from insertion and are
expired lazily on lookup. The clock is injectable so expiry can be tested
without sleeping. Nothing is written to disk; a restart starts empty.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from poe2_gems.types import GemRecord

DEFAULT_TTL = 3600.0


@dataclass(frozen=True)
class CacheEntry:
    value: GemRecord | None
    stored_at: float


def _copy_entry(entry: CacheEntry) -> CacheEntry:
    if entry.value is None:
        return entry
    return CacheEntry(value=dict(entry.value), stored_at=entry.stored_at)


class CacheClient:
    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.time):
        if ttl <= 0:
            raise ValueError(f"Cache TTL must be positive, got {ttl}")
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def _expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at >= self._ttl

    def _evict_expired(self, now: float) -> None:
        stale = [key for key, entry in self._entries.items() if self._expired(entry, now)]
        for key in stale:
            del self._entries[key]

    # Records are copied in and out so callers can never mutate a cached value.
    def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._expired(entry, self._clock()):
            del self._entries[key]
            return None
        return _copy_entry(entry)

    def put(self, key: str, value: GemRecord | None) -> None:
        now = self._clock()
        self._evict_expired(now)
        self._entries[key] = _copy_entry(CacheEntry(value=value, stored_at=now))

    # Keys are the gem name exactly as the caller typed it.
    def get_gem(self, gem_name: str) -> CacheEntry | None:
        return self.get(f"gem:{gem_name}")

    def set_gem(self, gem_name: str, record: GemRecord | None) -> None:
        self.put(f"gem:{gem_name}", record)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
