# wanderai/api/destinations.py
"""Static destination data: curated landmarks and per-country travel facts."""

from __future__ import annotations

import json
import logging
import os
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional

from wanderai.api.models import DestinationInfo, Place

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")

DEFAULT_DESTINATION_INFO = DestinationInfo(
    best_time_to_visit="Year-round (varies by destination)",
    weather_info="Check local weather forecast before traveling",
    local_currency="Local currency varies",
    emergency_contacts={
        "police": "Local emergency number",
        "medical": "Local emergency number",
        "embassy": "Contact Indian Embassy",
    },
)


def normalize_destination(name: str) -> str:
    """Lower-case and collapse whitespace so lookups ignore formatting."""
    return re.sub(r"\s+", " ", (name or "").strip()).lower()


@lru_cache(maxsize=None)
def _load_json(filename: str) -> Dict[str, Any]:
    path = os.path.join(DATA_DIR, filename)
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    logger.debug(f"Loaded {filename} from {path}")
    return data


class LandmarkDataset:
    """Hand-authored landmarks keyed by normalized destination name."""

    def __init__(self, entries: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        if entries is None:
            entries = _load_json("landmarks.json")
        self._entries = {normalize_destination(k): v for k, v in entries.items()}

    def places_for(self, destination: str) -> List[Place]:
        rows = self._entries.get(normalize_destination(destination), [])
        return [
            Place(
                id=row["id"],
                name=row["name"],
                category=row.get("category", "attraction"),
                rating=float(row.get("rating", 4.0)),
                price_level=int(row.get("price_level", 1)),
                address=row.get("address", destination),
                description=row.get("description", ""),
                lat=row.get("lat"),
                lng=row.get("lng"),
                source="curated",
            )
            for row in rows
        ]


def country_for_city(city: str) -> Optional[str]:
    return _load_json("countries.json")["cities"].get(normalize_destination(city))


def _country_row(country: Optional[str]) -> Optional[Dict[str, Any]]:
    if not country:
        return None
    return _load_json("countries.json")["countries"].get(country)


def get_destination_info(country: Optional[str]) -> DestinationInfo:
    """Return practical info for ``country`` or generic placeholders."""
    row = _country_row(country)
    if row is None:
        return DEFAULT_DESTINATION_INFO
    return DestinationInfo(
        best_time_to_visit=row["best_time_to_visit"],
        weather_info=row["weather_info"],
        local_currency=row["local_currency"],
        emergency_contacts=dict(row["emergency_contacts"]),
    )


def get_city_info(city: str, landmarks: Optional[LandmarkDataset] = None) -> Dict[str, Any]:
    """Build the CityInfo payload served by the city lookup endpoints."""
    landmarks = landmarks or LandmarkDataset()
    country = country_for_city(city)
    row = _country_row(country) or {}

    curated = [p.name for p in landmarks.places_for(city) if p.category == "attraction"]
    attractions = curated[:5] or [
        "Historic City Center",
        "Main Cathedral",
        "Art Museum",
        "Local Market",
    ]

    return {
        "name": city,
        "country": country or "Unknown",
        "currency": row.get("currency_code", "USD"),
        "timeZone": row.get("time_zone", "UTC"),
        "popularAttractions": attractions,
        "averageCosts": {
            "budget": {"min": 50, "max": 100},
            "midRange": {"min": 100, "max": 200},
            "luxury": {"min": 200, "max": 500},
        },
        "bestTimeToVisit": row.get("best_time_to_visit", "Year-round"),
        "safetyRating": 4.2,
    }


__all__ = [
    "LandmarkDataset",
    "country_for_city",
    "get_city_info",
    "get_destination_info",
    "normalize_destination",
]
