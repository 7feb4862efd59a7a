"""
Bounded reverse-geocoding cache.

Keys are coordinates rounded to `precision` decimal places (4 places is
roughly 11 m at the equator). When full, the least recently used entry is
evicted.
"""

from collections import OrderedDict
from threading import Lock
from typing import Dict, Optional, Tuple
import logging

from .base import GeocodingProvider, is_empty_result

logger = logging.getLogger(__name__)

CacheKey = Tuple[float, float]


class ReverseGeocodeCache:

    def __init__(self, max_size: int = 256, precision: int = 4):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.precision = precision
        self._entries: "OrderedDict[CacheKey, Dict]" = OrderedDict()
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    def key_for(self, latitude: float, longitude: float) -> CacheKey:
        return round(latitude, self.precision), round(longitude, self.precision)

    def get(self, latitude: float, longitude: float) -> Optional[Dict]:
        key = self.key_for(latitude, longitude)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return dict(entry)

    def put(self, latitude: float, longitude: float, result: Dict) -> None:
        key = self.key_for(latitude, longitude)
        with self._lock:
            self._entries[key] = dict(result)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted reverse-geocode cache entry {evicted}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class CachedGeocoder:
    """Provider wrapper that consults an injected cache before the network."""

    def __init__(self, provider: GeocodingProvider, cache: ReverseGeocodeCache):
        self.provider = provider
        self.cache = cache

    def reverse_geocode(self, latitude: float, longitude: float) -> Dict:
        cached = self.cache.get(latitude, longitude)
        if cached is not None:
            return cached

        result = self.provider.reverse_geocode(latitude, longitude)
        # Failures come back empty; keep them out so the next call retries
        if not is_empty_result(result):
            self.cache.put(latitude, longitude, result)
        return result
