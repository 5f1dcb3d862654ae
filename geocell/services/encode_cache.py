from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from functools import lru_cache

from geocell.core.settings import get_settings
from geocell.utils.geohash import encode


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheStats:
    size: int
    enabled: bool
    hits: int
    misses: int


def cache_key(latitude: float, longitude: float, precision: int) -> str:
    return f"{latitude:.6f},{longitude:.6f}:{precision}"


class EncodeCache:
    """Memoizing wrapper around `encode`, safe to share across threads.

    Keys are the coordinate rounded to 6 decimals (~0.1m) plus precision.
    Entries are evicted oldest-first once `max_entries` is reached.
    """

    def __init__(self, *, enabled: bool = True, max_entries: int = 10_000) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be > 0")
        self._enabled = enabled
        self._max_entries = max_entries
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def encode(self, latitude: float, longitude: float, *, precision: int) -> str:
        if not self._enabled:
            return encode(latitude, longitude, precision=precision)

        key = cache_key(latitude, longitude, precision)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._hits += 1
                return cached

        # Validation errors propagate here and never reach the map.
        geohash = encode(latitude, longitude, precision=precision)

        with self._lock:
            self._misses += 1
            if key not in self._entries and len(self._entries) >= self._max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.debug("Encode cache full; evicted %s", oldest)
            self._entries[key] = geohash
        return geohash

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                enabled=self._enabled,
                hits=self._hits,
                misses=self._misses,
            )

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.debug("Encode cache cleared (%d entries)", dropped)


@lru_cache
def get_encode_cache() -> EncodeCache:
    settings = get_settings()
    return EncodeCache(
        enabled=settings.encode_cache_enabled,
        max_entries=int(settings.encode_cache_max_entries),
    )
