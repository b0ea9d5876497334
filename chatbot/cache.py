"""In-memory URL -> ProductRecord cache with time-based expiry.

Entries expire lazily on read (and via ``sweep``); there are no per-entry
timers. Expiry is a pure function of (now, inserted_at, ttl) and the clock
is injectable, so tests can move time forward without sleeping.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from salespage.models import ProductRecord

from .config import CACHE_TTL_SECONDS

__all__ = ["ProductCache", "CacheEntry", "is_expired"]


def is_expired(now: float, inserted_at: float, ttl: float) -> bool:
    """True once ``ttl`` seconds have passed since ``inserted_at``."""
    return now - inserted_at >= ttl


@dataclass(frozen=True)
class CacheEntry:
    record: ProductRecord
    inserted_at: float
    ttl: float


@dataclass
class _LoadSlot:
    """Per-URL load lock plus the number of callers holding or waiting on it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class ProductCache:
    """Thread-safe product cache keyed by page URL."""

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._load_slots: Dict[str, _LoadSlot] = {}

    def get(self, url: str) -> Optional[ProductRecord]:
        """Cached record for ``url``, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None
            if is_expired(self._clock(), entry.inserted_at, entry.ttl):
                del self._entries[url]
                return None
            return entry.record

    def put(self, url: str, record: ProductRecord, ttl: Optional[float] = None) -> None:
        entry = CacheEntry(record=record, inserted_at=self._clock(), ttl=self.ttl if ttl is None else ttl)
        with self._lock:
            self._entries[url] = entry

    def get_or_load(self, url: str, loader: Callable[[str], ProductRecord]) -> ProductRecord:
        """Return the cached record, or load and cache it.

        Concurrent misses for the same URL wait on a per-URL lock so the
        loader runs once; other URLs are not blocked.
        """
        record = self.get(url)
        if record is not None:
            return record

        with self._lock:
            slot = self._load_slots.setdefault(url, _LoadSlot())
            slot.users += 1

        try:
            with slot.lock:
                record = self.get(url)
                if record is None:
                    record = loader(url)
                    self.put(url, record)
        finally:
            # The last caller out removes the slot, even when the loader raised
            with self._lock:
                slot.users -= 1
                if slot.users == 0:
                    self._load_slots.pop(url, None)
        return record

    def sweep(self) -> int:
        """Drop every expired entry; returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [
                url for url, entry in self._entries.items()
                if is_expired(now, entry.inserted_at, entry.ttl)
            ]
            for url in expired:
                del self._entries[url]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Number of live (unexpired) entries."""
        self.sweep()
        with self._lock:
            return len(self._entries)

    def __contains__(self, url: str) -> bool:
        return self.get(url) is not None
