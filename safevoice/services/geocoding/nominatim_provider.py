from typing import Optional

import requests

from .base import Address, HttpGeocodingProvider, empty_result

# Nominatim's address keys, most specific first
LOCALITY_KEYS = ("suburb", "neighbourhood", "quarter", "village", "town")
CITY_KEYS = ("city", "town", "village")


def _first(address: dict, keys) -> Optional[str]:
    return next((address[key] for key in keys if address.get(key)), None)


class NominatimProvider(HttpGeocodingProvider):
    """
    OpenStreetMap Nominatim. No API key; the usage policy requires a
    descriptive User-Agent.
    """

    name = "nominatim"
    BASE_URL = "https://nominatim.openstreetmap.org/reverse"

    def __init__(self, user_agent: str = "safevoice-admin/1.0", session: Optional[requests.Session] = None):
        super().__init__(session)
        self.user_agent = user_agent

    def reverse_geocode(self, latitude: float, longitude: float) -> Address:
        data = self._get_json(
            self.BASE_URL,
            params={"lat": latitude, "lon": longitude, "format": "json", "addressdetails": 1},
            headers={"User-Agent": self.user_agent},
        )
        if not isinstance(data, dict):
            return empty_result(self.name)

        address = data.get("address") or {}
        return {
            "formatted_address": data.get("display_name"),
            "locality": _first(address, LOCALITY_KEYS),
            "city": _first(address, CITY_KEYS),
            "state": address.get("state"),
            "country": address.get("country"),
            "provider": self.name,
        }
