"""Time-bounded cache of search results."""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional, Sequence, Tuple

from job_assistant.logging import get_logger
from job_assistant.utils.timestamps import ensure_utc, utc_now

from .models import SearchResult

logger = get_logger(__name__, component="pipeline")

CacheKey = Tuple[Tuple[str, ...], int, str]


@dataclass
class _Entry:
    result: SearchResult
    stored_at: datetime


class SearchResultCache:
    """Search results keyed by (queries, date-range days, location).

    Entries older than ``ttl_seconds`` are treated as missing and evicted
    on access. All reads and writes go through one lock, since searches
    may run from several threads.

    The cache lives in process memory. It serves library callers that run
    several searches on one orchestrator; the CLI runs a single search per
    process and never hits it.

    Example:
        >>> cache = SearchResultCache(ttl_seconds=86400)
        >>> cache.put(["project manager"], 7, result)
        >>> cache.get(["project manager"], 7) is result
        True
    """

    def __init__(self, ttl_seconds: int = 86400):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl = timedelta(seconds=ttl_seconds)
        self._entries: Dict[CacheKey, _Entry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(queries: Sequence[str], days: int, location: str = "") -> CacheKey:
        return tuple(q.strip().lower() for q in queries), days, location.strip().lower()

    def get(
        self,
        queries: Sequence[str],
        days: int,
        now: Optional[datetime] = None,
        location: str = "",
    ) -> Optional[SearchResult]:
        now = ensure_utc(now or utc_now())
        key = self.make_key(queries, days, location)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now - entry.stored_at > self.ttl:
                del self._entries[key]
                logger.debug(
                    "Cached search result expired",
                    extra={"event": "cache.expired", "queries": list(key[0]), "days": days},
                )
                return None
            return entry.result

    def put(
        self,
        queries: Sequence[str],
        days: int,
        result: SearchResult,
        now: Optional[datetime] = None,
        location: str = "",
    ) -> None:
        now = ensure_utc(now or utc_now())
        with self._lock:
            self._entries[self.make_key(queries, days, location)] = _Entry(result=result, stored_at=now)

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Drop every stale entry; returns how many were removed."""
        now = ensure_utc(now or utc_now())
        with self._lock:
            stale = [key for key, entry in self._entries.items() if now - entry.stored_at > self.ttl]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
