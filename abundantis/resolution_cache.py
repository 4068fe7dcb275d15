"""Resolved variables and the two-level cache that holds them."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .config import CacheConfig


@dataclass(frozen=True)
class CacheKey:
    """Identifies a cached variable: its name and a hash of its workspace context."""

    key: str = ""
    context_hash: int = 0


@dataclass(frozen=True)
class ResolvedVariable:
    """A variable after interpolation, together with where it came from."""

    key: str
    raw_value: str
    resolved_value: str
    source: Any
    description: Optional[str] = None
    has_warnings: bool = False
    interpolation_depth: int = 0


@dataclass(frozen=True)
class CachedValue:
    """A resolved variable and the clock reading at which it was cached."""

    value: ResolvedVariable
    cached_at: float


class ResolutionCache:
    """A bounded LRU cache backed by an unbounded cache, both expiring after a TTL.

    Every entry is stored in both levels, so one inserted key counts twice in ``len``.
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        config = config if config is not None else CacheConfig()
        self._capacity = max(config.hot_cache_size, 1)
        self._hot: OrderedDict = OrderedDict()
        self._ttl_cache: dict = {}
        self._ttl = config.ttl
        self._enabled = config.enabled
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _fresh(self, cached: CachedValue, now: float) -> bool:
        return now - cached.cached_at < self._ttl

    def get(self, key: CacheKey) -> Optional[ResolvedVariable]:
        """Return the cached variable for ``key`` if present and not expired."""
        if not self._enabled:
            return None
        now = self._clock()
        with self._lock:
            cached = self._ttl_cache.get(key)
            if cached is not None:
                if self._fresh(cached, now):
                    return cached.value
                del self._ttl_cache[key]

            cached = self._hot.get(key)
            if cached is not None:
                self._hot.move_to_end(key)
                if self._fresh(cached, now):
                    return cached.value
        return None

    def insert(self, key: CacheKey, value: ResolvedVariable) -> None:
        if not self._enabled:
            return
        cached = CachedValue(value, self._clock())
        with self._lock:
            self._ttl_cache[key] = cached
            self._hot[key] = cached
            self._hot.move_to_end(key)
            while len(self._hot) > self._capacity:
                self._hot.popitem(last=False)

    def invalidate(self, key: CacheKey) -> None:
        if not self._enabled:
            return
        with self._lock:
            self._ttl_cache.pop(key, None)
            self._hot.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._ttl_cache.clear()
            self._hot.clear()

    def __len__(self) -> int:
        if not self._enabled:
            return 0
        with self._lock:
            return len(self._ttl_cache) + len(self._hot)

    def is_empty(self) -> bool:
        return not self._enabled or len(self) == 0

    def cleanup_expired(self) -> None:
        """Drop every expired entry from both levels."""
        if not self._enabled:
            return
        now = self._clock()
        with self._lock:
            self._ttl_cache = {
                k: v for k, v in self._ttl_cache.items() if self._fresh(v, now)
            }
            for key in [k for k, v in self._hot.items() if not self._fresh(v, now)]:
                del self._hot[key]