from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging

import requests

logger = logging.getLogger(__name__)

GEOCODE_TIMEOUT_SECONDS = 3.0

Address = Dict[str, Optional[str]]


class GeocodingProvider(ABC):
    """
    Abstract reverse-geocoding provider.

    reverse_geocode(lat, lng) returns:
      {
        "formatted_address": str | None,
        "locality": str | None,
        "city": str | None,
        "state": str | None,
        "country": str | None,
        "provider": str
      }
    Never raises; on failure every field but `provider` is None.
    """

    name = "base"

    @abstractmethod
    def reverse_geocode(self, latitude: float, longitude: float) -> Address:
        raise NotImplementedError


class HttpGeocodingProvider(GeocodingProvider):
    """Provider backed by a JSON HTTP API, called through a requests session."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def _get_json(self, url: str, params: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Optional[Dict]:
        try:
            resp = self.session.get(url, params=params, headers=headers, timeout=GEOCODE_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            logger.warning(f"{self.name} reverse-geocode request failed: {e}")
            return None
        if resp.status_code != 200:
            logger.warning(f"{self.name} reverse-geocode failed with status {resp.status_code}")
            return None
        try:
            return resp.json()
        except ValueError as e:
            logger.warning(f"{self.name} reverse-geocode returned invalid JSON: {e}")
            return None


def empty_result(provider: str) -> Address:
    return {
        "formatted_address": None,
        "locality": None,
        "city": None,
        "state": None,
        "country": None,
        "provider": provider,
    }


def is_empty_result(result: Address) -> bool:
    return not any(value for key, value in result.items() if key != "provider")
