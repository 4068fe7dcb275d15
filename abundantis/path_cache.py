"""Cache of canonicalised filesystem paths."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, Path]


@dataclass(frozen=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    errors: int = 0


class PathCache:
    """Thread-safe cache that resolves each path on the filesystem only once."""

    def __init__(self) -> None:
        self._resolved: dict = {}
        self._fallback: dict = {}
        self._hits = 0
        self._misses = 0
        self._errors = 0
        self._lock = threading.Lock()

    def canonicalize(self, path: PathLike) -> Path:
        """Return the canonical form of ``path``, or ``path`` itself if it cannot be resolved."""
        key = Path(path)
        with self._lock:
            for table in (self._resolved, self._fallback):
                if key in table:
                    self._hits += 1
                    return table[key]
            self._misses += 1
            try:
                resolved = key.resolve(strict=True)
            except (OSError, RuntimeError):
                self._errors += 1
                self._fallback[key] = key
                return key
            self._resolved[key] = resolved
            return resolved

    def canonicalize_many(self, paths: Iterable[PathLike]) -> list:
        return [self.canonicalize(path) for path in paths]

    def invalidate(self, path: PathLike) -> None:
        key = Path(path)
        with self._lock:
            self._resolved.pop(key, None)
            self._fallback.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._resolved.clear()
            self._fallback.clear()
            self._hits = self._misses = self._errors = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(self._hits, self._misses, self._errors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._resolved) + len(self._fallback)

    def is_empty(self) -> bool:
        return len(self) == 0

    def hit_rate(self) -> float:
        """Fraction of lookups served from the cache, between 0.0 and 1.0."""
        with self._lock:
            total = self._hits + self._misses
            return self._hits / total if total else 0.0