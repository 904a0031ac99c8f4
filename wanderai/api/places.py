# wanderai/api/places.py
"""Tiered place lookup: live maps data, curated landmarks, generic placeholders."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from wanderai.api.destinations import LandmarkDataset, country_for_city
from wanderai.api.geocoding import MapsClient
from wanderai.api.models import Place

logger = logging.getLogger(__name__)

ATTRACTION_RADIUS_M = 10000
RESTAURANT_RADIUS_M = 5000
MIN_RATING = 4.0
MAX_ATTRACTIONS = 8
MAX_RESTAURANTS = 4


def category_from_types(types: Sequence[str]) -> str:
    """Map Google place types onto our place categories."""
    types = set(types or [])
    if types & {"restaurant", "food", "meal_takeaway"}:
        return "dining"
    if "lodging" in types:
        return "lodging"
    if types & {"amusement_park", "zoo", "bowling_alley"}:
        return "activity"
    return "attraction"


class PlaceTier:
    """One source of places. ``fetch`` returns an empty list when it has nothing."""

    name = "tier"

    def fetch(self, destination: str) -> List[Place]:
        raise NotImplementedError


class LivePlaceTier(PlaceTier):
    name = "live"

    def __init__(self, maps: Optional[MapsClient] = None):
        self.maps = maps or MapsClient()

    @property
    def enabled(self) -> bool:
        return self.maps.enabled

    def fetch(self, destination: str) -> List[Place]:
        if not self.enabled:
            logger.info("Google Maps API not available, skipping live places")
            return []

        location = self.maps.geocode_city(destination)
        if location is None:
            logger.info(f"Could not get coordinates for {destination}")
            return []

        attractions = self.maps.search_nearby(
            location.lat,
            location.lng,
            ATTRACTION_RADIUS_M,
            "tourist_attraction",
            min_rating=MIN_RATING,
            limit=MAX_ATTRACTIONS,
        )
        restaurants = self.maps.search_nearby(
            location.lat,
            location.lng,
            RESTAURANT_RADIUS_M,
            "restaurant",
            min_rating=MIN_RATING,
            limit=MAX_RESTAURANTS,
        )
        logger.info(
            f"Found {len(attractions)} attractions and {len(restaurants)} restaurants for {destination}"
        )

        places = [self._to_place(p, destination, dining=False) for p in attractions]
        places += [self._to_place(p, destination, dining=True) for p in restaurants]
        return [p for p in places if p is not None]

    @staticmethod
    def _to_place(raw: Dict[str, Any], destination: str, dining: bool) -> Place | None:
        try:
            category = "dining" if dining else category_from_types(raw.get("types", []))
            loc = raw.get("geometry", {}).get("location", {})
            if category == "dining":
                description = (
                    f"{raw['name']} - Authentic dining experience in {destination} "
                    f"serving delicious local cuisine."
                )
            else:
                description = (
                    f"{raw['name']} - A popular {category} in {destination} "
                    f"with excellent reviews and cultural significance."
                )
            price_level = raw.get("price_level")
            if price_level is None:
                price_level = 2 if dining else 1
            return Place(
                id=raw["place_id"],
                name=raw["name"],
                category=category,
                rating=float(raw.get("rating") or MIN_RATING),
                price_level=int(price_level),
                address=raw.get("formatted_address") or raw.get("vicinity") or destination,
                description=description,
                lat=loc.get("lat"),
                lng=loc.get("lng"),
                website=raw.get("website"),
                phone=raw.get("formatted_phone_number"),
                source="live",
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed place result: {e}")
            return None


class CuratedPlaceTier(PlaceTier):
    name = "curated"

    def __init__(self, dataset: Optional[LandmarkDataset] = None):
        self.dataset = dataset or LandmarkDataset()

    def fetch(self, destination: str) -> List[Place]:
        places = self.dataset.places_for(destination)
        if places:
            logger.info(f"Found {len(places)} curated landmarks for {destination}")
        return places


class GenericPlaceTier(PlaceTier):
    name = "generic"

    def fetch(self, destination: str) -> List[Place]:
        city = destination.strip() or "City"
        return [
            Place(
                id="generic_1",
                name=f"{city} Heritage Museum",
                category="attraction",
                rating=4.3,
                price_level=2,
                address=f"Old City, {city}",
                description=f"Discover the rich cultural heritage and history of {city}",
            ),
            Place(
                id="generic_2",
                name=f"{city} Central Market",
                category="attraction",
                rating=4.1,
                price_level=1,
                address=f"Market District, {city}",
                description=f"Traditional market offering local handicrafts and authentic {city} products",
            ),
            Place(
                id="generic_3",
                name=f"Local Restaurant {city}",
                category="dining",
                rating=4.2,
                price_level=2,
                address=f"Food Street, {city}",
                description=f"Authentic local cuisine and traditional dishes of {city}",
            ),
        ]


class PlaceProvider:
    """Evaluates tiers in order; the first non-empty result wins."""

    def __init__(
        self,
        tiers: Optional[Sequence[PlaceTier]] = None,
        maps: Optional[MapsClient] = None,
        landmarks: Optional[LandmarkDataset] = None,
    ):
        self.maps = maps or MapsClient()
        if tiers is None:
            tiers = [
                LivePlaceTier(self.maps),
                CuratedPlaceTier(landmarks),
                GenericPlaceTier(),
            ]
        self.tiers = list(tiers)

    @property
    def live_enabled(self) -> bool:
        return self.maps.enabled

    def fetch_places(self, destination: str) -> List[Place]:
        for tier in self.tiers:
            try:
                places = tier.fetch(destination)
            except Exception as e:
                logger.error(f"Place tier '{tier.name}' failed for {destination}: {e}")
                continue
            if places:
                logger.info(f"Using {tier.name} places for {destination} ({len(places)} found)")
                return places
        # A custom tier list may omit the generic tier
        return GenericPlaceTier().fetch(destination)

    def resolve_country(self, destination: str) -> Optional[str]:
        """Country from live geocoding when available, else the static table."""
        if self.live_enabled:
            location = self.maps.geocode_city(destination)
            if location is not None and location.country:
                return location.country
        return country_for_city(destination)

    def check_health(self) -> bool:
        if not self.live_enabled:
            return False
        return self.maps.test_connection()


__all__ = [
    "PlaceProvider",
    "PlaceTier",
    "LivePlaceTier",
    "CuratedPlaceTier",
    "GenericPlaceTier",
    "category_from_types",
]
