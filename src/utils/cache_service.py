"""
In-memory read-through cache for applicant lookups.

Applicant records never change after issuance, so a found record can be
served from memory across warm Lambda invocations. Misses are not cached:
a pass id that is unknown now may be issued a moment later.
"""

from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Callable, Optional


class RecordCache:
    """Thread-safe LRU cache with TTL that only remembers hits."""

    def __init__(self, max_size: int = 500, ttl_seconds: int = 300):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._entries: "OrderedDict[str, tuple[Any, datetime]]" = OrderedDict()
        self._lock = Lock()

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._now() - stored_at > timedelta(seconds=self.ttl_seconds):
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return value

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (value, self._now())
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def get_or_load(self, key: str, loader: Callable[[], Optional[Any]]) -> Optional[Any]:
        """Return the cached value or call ``loader``; None results are not stored."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = loader()
        if value is not None:
            self.put(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
