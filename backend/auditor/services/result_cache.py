"""
Result Cache - Last audit result per origin, valid for a TTL.

Pattern:
- Entries are (timestamp, AuditResult), replaced wholesale, never mutated
- Staleness is checked on read; nothing is swept in the background
- One asyncio.Lock per in-flight origin lets concurrent audits of a site share a crawl
"""

import asyncio
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from threading import Lock
from typing import AsyncIterator, Callable, Dict, Optional

from auditor.config import settings
from auditor.logger import logger
from auditor.schemas.audit_result import AuditResult


@dataclass(frozen=True)
class CacheEntry:
    timestamp: float
    result: AuditResult


@dataclass
class _OriginLock:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0  # holders plus waiters


class ResultCache:
    """In-memory TTL cache keyed by site origin."""

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.CACHE_TTL_SECONDS
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._origin_locks: Dict[str, _OriginLock] = {}
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    def get(self, origin: str) -> Optional[AuditResult]:
        """Return the cached result if it is younger than the TTL."""
        with self._lock:
            entry = self._entries.get(origin)
            if entry is not None and self.clock() - entry.timestamp < self.ttl_seconds:
                self.hits += 1
                return entry.result
            self.misses += 1
            return None

    def set(self, origin: str, result: AuditResult) -> None:
        with self._lock:
            self._entries[origin] = CacheEntry(timestamp=self.clock(), result=result)

    def invalidate(self, origin: str) -> bool:
        with self._lock:
            removed = self._entries.pop(origin, None) is not None
        if removed:
            logger.info(f"Cache entry invalidated for {origin}")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @asynccontextmanager
    async def origin_lock(self, origin: str) -> AsyncIterator[None]:
        """Hold the per-origin lock used to coalesce concurrent audits.

        The lock is dropped once no caller holds or waits on it.
        """
        with self._lock:
            entry = self._origin_locks.get(origin)
            if entry is None:
                entry = self._origin_locks[origin] = _OriginLock()
            entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            with self._lock:
                entry.users -= 1
                if entry.users == 0:
                    del self._origin_locks[origin]

    def stats(self) -> dict:
        with self._lock:
            now = self.clock()
            fresh = sum(1 for e in self._entries.values() if now - e.timestamp < self.ttl_seconds)
            return {
                "entries": len(self._entries),
                "fresh_entries": fresh,
                "ttl_seconds": self.ttl_seconds,
                "hits": self.hits,
                "misses": self.misses,
                "in_flight": len(self._origin_locks),
            }
