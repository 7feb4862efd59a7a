from .base import GeocodingProvider, empty_result
from .cache import CachedGeocoder, ReverseGeocodeCache
from .resolver import build_provider, get_geocoder

__all__ = [
    "GeocodingProvider",
    "empty_result",
    "CachedGeocoder",
    "ReverseGeocodeCache",
    "build_provider",
    "get_geocoder",
]
