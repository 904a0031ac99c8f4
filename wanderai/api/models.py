"""Shared data structures for itinerary planning.

Every entity exposes ``to_dict()`` returning the camelCase JSON shape the
single-page client renders, so routes never build response dicts by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

PACES = ("easy", "medium", "hard")
PLACE_CATEGORIES = ("attraction", "dining", "activity", "lodging")
HOTEL_TIERS = ("budget", "midrange", "luxury")


def _format_date(value: date) -> str:
    # e.g. "March 5, 2026"
    return f"{value.strftime('%B')} {value.day}, {value.year}"


@dataclass
class TripRequest:
    """A validated request to plan a trip."""

    destination: str
    total_budget: float  # in ``currency`` units
    total_days: int
    pace: str = "medium"
    currency: str = "USD"
    start_date: Optional[date] = None


@dataclass(frozen=True)
class Place:
    """A candidate attraction, restaurant or venue returned by a provider tier."""

    id: str
    name: str
    category: str
    rating: float
    price_level: int
    address: str
    description: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    image_url: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    source: str = "generic"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.category,
            "rating": self.rating,
            "priceLevel": self.price_level,
            "address": self.address,
            "description": self.description,
            "coordinates": (
                {"lat": self.lat, "lng": self.lng}
                if self.lat is not None and self.lng is not None
                else None
            ),
            "imageUrl": self.image_url,
            "website": self.website,
            "phone": self.phone,
            "source": self.source,
        }


@dataclass
class Hotel:
    id: str
    name: str
    tier: str
    price_per_night: int
    rating: float
    amenities: List[str]
    description: str
    address: str
    check_in: date
    check_out: date
    total_nights: int
    total_cost: int
    contact: Dict[str, str] = field(default_factory=dict)
    price_per_night_original: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.tier,
            "pricePerNight": self.price_per_night,
            "pricePerNightOriginal": self.price_per_night_original,
            "rating": self.rating,
            "amenities": list(self.amenities),
            "description": self.description,
            "address": self.address,
            "checkIn": _format_date(self.check_in),
            "checkOut": _format_date(self.check_out),
            "totalNights": self.total_nights,
            "totalCost": self.total_cost,
            "contact": dict(self.contact),
        }


@dataclass
class Activity:
    id: str
    name: str
    category: str
    time: str
    duration: str
    cost: int
    rating: float
    description: str
    address: str
    tips: Optional[str] = None
    image_url: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.category,
            "time": self.time,
            "duration": self.duration,
            "cost": self.cost,
            "rating": self.rating,
            "description": self.description,
            "address": self.address,
        }
        if self.tips:
            data["tips"] = self.tips
        if self.image_url:
            data["imageUrl"] = self.image_url
        return data


@dataclass
class Day:
    day_number: int  # 1-based
    date: date
    total_cost: int
    summary: str
    highlights: List[str]
    morning: List[Activity] = field(default_factory=list)
    afternoon: List[Activity] = field(default_factory=list)
    evening: List[Activity] = field(default_factory=list)
    hotel: Optional[Hotel] = None

    @property
    def activities(self) -> List[Activity]:
        return [*self.morning, *self.afternoon, *self.evening]

    def to_dict(self) -> dict:
        return {
            "day": self.day_number,
            "date": _format_date(self.date),
            "totalCost": self.total_cost,
            "summary": self.summary,
            "highlights": list(self.highlights),
            "activities": {
                "morning": [a.to_dict() for a in self.morning],
                "afternoon": [a.to_dict() for a in self.afternoon],
                "evening": [a.to_dict() for a in self.evening],
            },
            "hotel": self.hotel.to_dict() if self.hotel else None,
        }


@dataclass
class DestinationInfo:
    """Static practical information about the destination country."""

    best_time_to_visit: str
    weather_info: str
    local_currency: str
    emergency_contacts: Dict[str, str]


@dataclass
class Itinerary:
    """Root aggregate returned to the caller for one generation request."""

    destination: str
    destination_country: str
    total_days: int
    total_budget: int  # canonical currency
    total_budget_original: float
    original_currency: str
    pace: str
    currency: str
    exchange_rate: Optional[float]
    days: List[Day]
    hotels: List[Hotel]
    total_hotel_cost: int
    total_activity_cost: int
    tips: List[str]
    info: DestinationInfo
    narrative_enrichment: Optional[str] = None
    place_source: str = "generic"

    def to_dict(self) -> dict:
        return {
            "destination": self.destination,
            "destinationCountry": self.destination_country,
            "totalDays": self.total_days,
            "totalBudget": self.total_budget,
            "totalBudgetOriginal": self.total_budget_original,
            "originalCurrency": self.original_currency,
            "difficulty": self.pace,
            "currency": self.currency,
            "exchangeRate": self.exchange_rate,
            "days": [d.to_dict() for d in self.days],
            "hotels": [h.to_dict() for h in self.hotels],
            "totalHotelCost": self.total_hotel_cost,
            "totalActivityCost": self.total_activity_cost,
            "tips": list(self.tips),
            "aiInsights": self.narrative_enrichment,
            "bestTimeToVisit": self.info.best_time_to_visit,
            "weatherInfo": self.info.weather_info,
            "localCurrency": self.info.local_currency,
            "emergencyContacts": dict(self.info.emergency_contacts),
            "placeSource": self.place_source,
        }
