import logging
from typing import List, Optional

import requests

from .base import Address, HttpGeocodingProvider, empty_result

logger = logging.getLogger(__name__)


def _component(components: List[dict], *types: str) -> Optional[str]:
    for component in components:
        if any(t in component.get("types", []) for t in types):
            return component.get("long_name")
    return None


class GoogleMapsProvider(HttpGeocodingProvider):
    """
    Google Maps Geocoding API.

    Selected only when GEOCODING_PROVIDER=google and GOOGLE_MAPS_API_KEY is set.
    """

    name = "google"
    BASE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, api_key: Optional[str], session: Optional[requests.Session] = None):
        super().__init__(session)
        self.api_key = api_key

    def reverse_geocode(self, latitude: float, longitude: float) -> Address:
        if not self.api_key:
            logger.info("GoogleMapsProvider called without API key; returning empty result.")
            return empty_result(self.name)

        data = self._get_json(self.BASE_URL, params={"latlng": f"{latitude},{longitude}", "key": self.api_key})
        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            return empty_result(self.name)

        best = results[0]
        components = best.get("address_components") or []
        return {
            "formatted_address": best.get("formatted_address"),
            "locality": _component(components, "sublocality", "neighborhood"),
            "city": _component(components, "locality", "postal_town"),
            "state": _component(components, "administrative_area_level_1"),
            "country": _component(components, "country"),
            "provider": self.name,
        }
