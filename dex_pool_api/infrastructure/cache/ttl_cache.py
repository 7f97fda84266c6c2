from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from threading import Lock
import time
from typing import Any


logger = logging.getLogger(__name__)


DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class TtlCache:
    """In-process key/value store whose entries expire a fixed time after insert.

    Expired entries are dropped lazily on lookup. When `max_entries` is set and
    the store is full, expired entries are purged first and then the entry
    closest to expiry is evicted. The lock is held only around dict access.
    """

    def __init__(
        self,
        *,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl_seconds = default_ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str, default: Any = None) -> Any:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.expires_at <= now:
                self._entries.pop(key, None)
                return default
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return
        now = self._clock()
        with self._lock:
            if self.max_entries is not None and key not in self._entries:
                self._make_room(now)
            self._entries[key] = CacheEntry(value=value, expires_at=now + ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _make_room(self, now: float) -> None:
        if len(self._entries) < self.max_entries:
            return
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        while self._entries and len(self._entries) >= self.max_entries:
            victim = min(self._entries, key=lambda key: self._entries[key].expires_at)
            del self._entries[victim]
            logger.debug("ttl_cache: evicted key=%s size=%s", victim, len(self._entries))
