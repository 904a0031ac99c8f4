# wanderai/api/geocoding.py
from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import googlemaps
from googlemaps import exceptions as gmaps_errors

from wanderai.api.config import get_google_maps_config

logger = logging.getLogger(__name__)

MAPS_ERRORS = (
    gmaps_errors.ApiError,
    gmaps_errors.TransportError,
    gmaps_errors.Timeout,
)

GEOCODE_CACHE_SIZE = 1000


@dataclass(frozen=True)
class CityLocation:
    lat: float
    lng: float
    country: Optional[str] = None

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng, "country": self.country or "Unknown"}


class MapsClient:
    """Thin wrapper over ``googlemaps.Client`` that never raises to callers.

    Every lookup returns ``None`` or an empty list when the key is missing,
    the quota is exhausted, access is denied or the network fails.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        base_url: Optional[str] = None,
        cache_size: int = GEOCODE_CACHE_SIZE,
    ):
        cfg = get_google_maps_config()
        self.api_key = cfg["api_key"] if api_key is None else api_key
        self.timeout = cfg["timeout"] if timeout is None else timeout
        self.base_url = base_url or cfg["base_url"]
        self.cache_size = cache_size
        self._gmaps: googlemaps.Client | None = None
        # least recently used first
        self._geocoding_cache: "OrderedDict[str, CityLocation]" = OrderedDict()

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> googlemaps.Client | None:
        """Return a cached googlemaps.Client instance."""
        if self._gmaps is None:
            if not self.api_key:
                logger.debug("No Google Maps API key configured")
                return None
            try:
                logger.info(f"Initializing Google Maps client with key: {self.api_key[:6]}...")
                # retry_timeout bounds the client's own 5xx retries to our timeout
                self._gmaps = googlemaps.Client(
                    key=self.api_key,
                    timeout=self.timeout,
                    retry_timeout=self.timeout,
                    retry_over_query_limit=False,
                    base_url=self.base_url,
                )
            except ValueError as e:
                logger.error(f"Failed to initialize Google Maps client: {e}")
                return None
        return self._gmaps

    def geocode_city(self, city: str) -> CityLocation | None:
        """Resolve a city name to coordinates and country, or None."""
        key = city.strip().lower()
        if key in self._geocoding_cache:
            self._geocoding_cache.move_to_end(key)
            return self._geocoding_cache[key]

        client = self._get_client()
        if client is None:
            return None

        try:
            logger.debug(f"Geocoding city: {city}")
            results = client.geocode(city, language="en")
        except gmaps_errors.ApiError as e:
            # REQUEST_DENIED and OVER_QUERY_LIMIT surface here
            logger.error(f"Google Maps geocode rejected for '{city}': {e.status} {e.message or ''}")
            return None
        except MAPS_ERRORS as e:
            logger.error(f"Geocoding error for '{city}': {e}")
            return None

        if not results:
            logger.warning(f"No geocoding results found for: {city}")
            return None

        try:
            first = results[0]
            loc = first["geometry"]["location"]
            country = next(
                (
                    c["long_name"]
                    for c in first.get("address_components", [])
                    if "country" in c.get("types", [])
                ),
                None,
            )
            location = CityLocation(lat=loc["lat"], lng=loc["lng"], country=country)
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Malformed geocode response for '{city}': {e}")
            return None

        self._geocoding_cache[key] = location
        while len(self._geocoding_cache) > self.cache_size:
            self._geocoding_cache.popitem(last=False)
        logger.debug(f"Geocoded {city} to {location.lat}, {location.lng} ({location.country})")
        return location

    def search_nearby(
        self,
        lat: float,
        lng: float,
        radius: int,
        place_type: str,
        min_rating: float = 4.0,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """Nearby search filtered by rating; empty list on any failure."""
        client = self._get_client()
        if client is None:
            return []

        try:
            response = client.places_nearby(location=(lat, lng), radius=radius, type=place_type)
        except MAPS_ERRORS as e:
            logger.error(f"Nearby search for '{place_type}' failed: {e}")
            return []

        status = response.get("status", "UNKNOWN")
        if status != "OK":
            logger.warning(f"Nearby search for '{place_type}' returned status {status}")
            return []

        results = [
            place
            for place in response.get("results", [])
            if (place.get("rating") or 0) >= min_rating
        ]
        return results[:limit]

    def test_connection(self) -> bool:
        logger.info("Testing Google Maps API connection...")
        ok = self.geocode_city("Mumbai") is not None
        logger.info(f"Google Maps API test: {'SUCCESS' if ok else 'FAILED'}")
        return ok


__all__ = ["MapsClient", "CityLocation"]
