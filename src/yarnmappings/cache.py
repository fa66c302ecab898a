"""TTL cache of parsed mapping lists, keyed by product version."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from .constants import Constants
from .models import MappingEntry


@dataclass(frozen=True)
class CacheEntry:
    """Parsed mappings of one product version and when they were stored."""

    version: str
    entries: Tuple[MappingEntry, ...]
    inserted_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """Check if this entry has expired."""
        return now >= self.expires_at


class MappingCache:
    """Expiring map from product version to its mapping entries.

    Expiry is checked when an entry is read; a periodic sweep on access drops
    expired entries that are never read again. Stored lists are frozen into
    tuples, so readers can hold on to them while a newer list replaces them.
    """

    def __init__(
        self,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the mapping cache.

        Args:
            ttl: Time-to-live in seconds, measured from insertion.
            clock: Source of the current time, in seconds.
        """
        self._ttl = ttl if ttl is not None else Constants.MAPPING_CACHE_TTL_SEC
        self._clock = clock
        self._cache: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._last_cleanup = clock()
        self._cleanup_interval = 60  # Run cleanup every minute

    def get(self, version: str) -> Optional[Sequence[MappingEntry]]:
        """Get the cached mappings of ``version``, or None if absent or expired."""
        entry = self.get_entry(version)
        return entry.entries if entry is not None else None

    def get_entry(self, version: str) -> Optional[CacheEntry]:
        now = self._clock()
        with self._lock:
            self._maybe_cleanup(now)
            entry = self._cache.get(version)
            if entry is None:
                return None
            if entry.is_expired(now):
                del self._cache[version]
                return None
            return entry

    def put(self, version: str, entries: Iterable[MappingEntry]) -> CacheEntry:
        """Store ``entries`` for ``version``, replacing any previous list."""
        now = self._clock()
        entry = CacheEntry(
            version=version,
            entries=tuple(entries),
            inserted_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._maybe_cleanup(now)
            self._cache[version] = entry
        return entry

    def invalidate(self, version: str) -> None:
        """Invalidate a cached entry."""
        with self._lock:
            self._cache.pop(version, None)

    def clear(self) -> None:
        """Clear all cached entries."""
        with self._lock:
            self._cache.clear()

    def __contains__(self, version: str) -> bool:
        return self.get_entry(version) is not None

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        now = self._clock()
        with self._lock:
            expired_count = sum(1 for e in self._cache.values() if e.is_expired(now))
            return {
                "total_entries": len(self._cache),
                "expired_entries": expired_count,
                "active_entries": len(self._cache) - expired_count,
                "mapping_count": sum(len(e.entries) for e in self._cache.values()),
                "ttl": self._ttl,
            }

    def _maybe_cleanup(self, now: float) -> None:
        """Run cleanup if enough time has passed."""
        if now - self._last_cleanup > self._cleanup_interval:
            self._cleanup(now)
            self._last_cleanup = now

    def _cleanup(self, now: float) -> None:
        """Remove expired entries."""
        keys_to_remove = [k for k, v in self._cache.items() if v.is_expired(now)]
        for key in keys_to_remove:
            del self._cache[key]
