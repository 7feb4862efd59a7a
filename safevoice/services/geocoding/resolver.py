import logging
from typing import Optional

from safevoice.core.settings import settings
from .base import GeocodingProvider
from .cache import CachedGeocoder, ReverseGeocodeCache
from .google_provider import GoogleMapsProvider
from .nominatim_provider import NominatimProvider

logger = logging.getLogger(__name__)

_geocoder_instance: Optional[CachedGeocoder] = None


def build_provider() -> GeocodingProvider:
    """
    Select the reverse-geocoding provider from settings.

    Rules:
    - Default: Nominatim (no API key required).
    - Google only when GEOCODING_PROVIDER='google' AND GOOGLE_MAPS_API_KEY is set.
    """
    provider_name = (settings.GEOCODING_PROVIDER or "nominatim").lower()

    if provider_name == "google":
        if settings.GOOGLE_MAPS_API_KEY:
            logger.info("Geocoding provider initialized: google")
            return GoogleMapsProvider(api_key=settings.GOOGLE_MAPS_API_KEY)
        logger.warning("GEOCODING_PROVIDER=google but GOOGLE_MAPS_API_KEY is not set. Falling back to Nominatim.")

    logger.info("Geocoding provider initialized: nominatim")
    return NominatimProvider()


def get_geocoder() -> CachedGeocoder:
    """Application geocoder: the configured provider behind a bounded cache."""
    global _geocoder_instance
    if _geocoder_instance is None:
        cache = ReverseGeocodeCache(
            max_size=settings.GEOCODE_CACHE_SIZE,
            precision=settings.GEOCODE_CACHE_PRECISION,
        )
        _geocoder_instance = CachedGeocoder(build_provider(), cache)
    return _geocoder_instance
