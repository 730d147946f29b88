"""
Bounded TTL cache with least-recently-used eviction.

Used for search results and query embeddings. Entries expire by TTL only;
writes to the embedding store do not invalidate cached results, so a
cached search can lag the store by at most the TTL.

Dependencies: collections, hashlib, json, time
System role: In-process result cache with hit-rate accounting
"""

import hashlib
import json
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

V = TypeVar("V")


@dataclass
class _Entry(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[V]):
    """
    Size-bounded mapping whose entries expire after a fixed TTL.

    Not thread-safe; intended for use from a single event loop.
    """

    def __init__(
        self,
        max_entries: int,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize cache.

        Args:
            max_entries: Maximum live entries before LRU eviction
            ttl_seconds: Lifetime of each entry (0 disables caching)
            clock: Monotonic time source (injectable for tests)
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, _Entry[V]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> V | None:
        """Return a live cached value, or None on miss/expiry."""
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        if self._clock() >= entry.expires_at:
            del self._entries[key]
            self.misses += 1
            return None

        self._entries.move_to_end(key)
        self.hits += 1
        return entry.value

    def set(self, key: str, value: V) -> None:
        """Store a value, evicting expired then least recently used entries."""
        if self._ttl <= 0:
            return

        self._entries[key] = _Entry(value=value, expires_at=self._clock() + self._ttl)
        self._entries.move_to_end(key)

        if len(self._entries) > self._max_entries:
            self.evict_expired()
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def evict_expired(self) -> int:
        """Drop expired entries. Returns the number removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        """Remove all entries (counters are kept)."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups served from cache (0.0 before any lookup)."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def stats(self) -> dict[str, Any]:
        """Cache size and hit/miss counters."""
        return {
            "size": len(self._entries),
            "max_entries": self._max_entries,
            "ttl_seconds": self._ttl,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hit_rate, 4),
        }


def fingerprint(*parts: Any) -> str:
    """
    Deterministic SHA-256 fingerprint of JSON-serializable parts.

    Keys are sorted so dicts with the same content hash identically.
    """
    payload = json.dumps(parts, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
