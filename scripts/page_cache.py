#!/usr/bin/env python3
"""
In-memory TTL cache for data fetched by the page layer.

Construct one ``PageCache`` per process (or per test) and pass it to whatever
needs it. The variation engine never touches this module.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from config import CACHE_TTL

T = TypeVar("T")

DEFAULT_SWEEP_THRESHOLD = 1000


class CacheTTL:
    """Lifetimes in seconds, per kind of page data."""

    HOMEPAGE = CACHE_TTL["homepage"]
    STATE_PAGE = CACHE_TTL["state_page"]
    CITY_PAGE = CACHE_TTL["city_page"]
    STATIC_DATA = CACHE_TTL["static_data"]
    SITEMAP = CACHE_TTL["sitemap"]


@dataclass
class _Entry:
    value: Any
    stored_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


class PageCache:
    """
    TTL cache keyed by string.

    ``sweep_threshold`` is a size above which each ``set`` drops expired
    entries; live entries are never evicted, so it is not a hard cap.
    """

    def __init__(self, sweep_threshold: int = DEFAULT_SWEEP_THRESHOLD, clock: Callable[[], float] = time.monotonic):
        self.sweep_threshold = sweep_threshold
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def _lookup(self, key: str) -> Tuple[bool, Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            if entry.expired(self._clock()):
                del self._entries[key]
                return False, None
            return True, entry.value

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        """Cached value, or ``default`` when missing or expired."""
        hit, value = self._lookup(key)
        return value if hit else default

    def set(self, key: str, value: Any, ttl: float = CacheTTL.STATE_PAGE) -> None:
        with self._lock:
            self._entries[key] = _Entry(value=value, stored_at=self._clock(), ttl=ttl)
            if len(self._entries) > self.sweep_threshold:
                self._sweep()

    def get_or_fetch(self, key: str, fetcher: Callable[[], T], ttl: float = CacheTTL.STATE_PAGE) -> T:
        """Return the cached value, or call ``fetcher`` and cache its result."""
        hit, value = self._lookup(key)
        if hit:
            return value

        value = fetcher()
        self.set(key, value, ttl)
        return value

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_prefix(self, prefix: str) -> None:
        with self._lock:
            for key in [k for k in self._entries if k.startswith(prefix)]:
                del self._entries[key]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _sweep(self) -> None:
        # Caller holds the lock.
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.expired(now)]:
            del self._entries[key]

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            keys: List[str] = list(self._entries)
        return {"size": len(keys), "keys": keys}


def states_key() -> str:
    return "states:all"


def state_key(slug: str) -> str:
    return f"state:{slug}"


def cities_key(state_id: int) -> str:
    return f"cities:{state_id}"


def city_key(state_slug: str, city_slug: str) -> str:
    return f"city:{state_slug}:{city_slug}"


def providers_key() -> str:
    return "providers:all"


def sitemap_key() -> str:
    return "sitemap:all"


def city_count_key() -> str:
    return "cities:count"
