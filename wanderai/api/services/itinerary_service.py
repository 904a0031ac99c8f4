# wanderai/api/services/itinerary_service.py
"""Service layer for itinerary generation."""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from wanderai.api.budget import Allocation, BudgetAllocator
from wanderai.api.currency import CurrencyNormalizer
from wanderai.api.destinations import get_destination_info
from wanderai.api.llm import NarrativeProvider
from wanderai.api.models import Activity, Day, Hotel, Itinerary, Place, TripRequest
from wanderai.api.places import GenericPlaceTier, PlaceProvider

logger = logging.getLogger(__name__)

# Per-day budget thresholds in USD: below the first -> budget, below the second -> midrange
HOTEL_TIER_THRESHOLDS_USD = (100, 250)

HOTEL_TEMPLATES = {
    "budget": {
        "names": ["Budget Inn", "Traveler's Lodge", "City Stay"],
        "price_per_night_usd": 30,
        "amenities": ["Free WiFi", "24/7 Reception", "Basic Breakfast"],
        "rating": 3.8,
    },
    "midrange": {
        "names": ["Grand Hotel", "Central Plaza", "Heritage Inn"],
        "price_per_night_usd": 80,
        "amenities": ["Free WiFi", "Restaurant", "Room Service", "Gym", "Pool"],
        "rating": 4.3,
    },
    "luxury": {
        "names": ["Royal Palace", "Luxury Suites", "Five Star Resort"],
        "price_per_night_usd": 200,
        "amenities": ["Free WiFi", "Multiple Restaurants", "Spa", "Concierge", "Valet", "Pool", "Gym"],
        "rating": 4.8,
    },
}

DAY_HIGHLIGHTS = {
    1: ["Historic landmarks", "Local culture"],
    2: ["Heritage sites", "Traditional cuisine"],
}
LATER_DAY_HIGHLIGHTS = ["Hidden gems", "Spiritual experiences"]


class ItineraryGenerationError(Exception):
    """Raised when assembling an itinerary fails for an internal reason."""


class ItineraryService:
    """Assembles a day-by-day plan from places, a budget and one hotel."""

    def __init__(
        self,
        place_provider: Optional[PlaceProvider] = None,
        narrative_provider: Optional[NarrativeProvider] = None,
        allocator: Optional[BudgetAllocator] = None,
        currency: Optional[CurrencyNormalizer] = None,
    ):
        self.place_provider = place_provider or PlaceProvider()
        self.narrative_provider = narrative_provider or NarrativeProvider()
        self.allocator = allocator or BudgetAllocator()
        self.currency = currency or CurrencyNormalizer.from_config()

    def generate(self, request: TripRequest) -> Itinerary:
        """Generate a new itinerary for a validated request.

        External failures (maps, narrative) degrade to fallback data and
        never raise. Anything else raises ItineraryGenerationError.
        """
        city = request.destination.strip()
        days = request.total_days
        logger.info(f"Generating itinerary for {city}, {days} days, pace={request.pace}")

        try:
            total_budget = self.currency.to_canonical(request.total_budget, request.currency)
            start = request.start_date or date.today()

            per_day_usd = self._amount_in_usd(request) / days
            tier = self.select_hotel_tier(per_day_usd)
            hotel = self._build_hotel(city, tier, days, start)

            places, narrative = self._fetch_external(city, total_budget, days, request.pace)
            country = self.place_provider.resolve_country(city)

            allocation = self.allocator.allocate(
                total_budget,
                days,
                request.pace,
                nightly_rate=hotel.price_per_night,
                nights=hotel.total_nights,
            )

            attractions = [p for p in places if p.category in ("attraction", "activity")]
            dining = [p for p in places if p.category == "dining"]
            if not attractions:
                attractions = [p for p in GenericPlaceTier().fetch(city) if p.category == "attraction"]

            itinerary_days = [
                self._build_day(
                    n, city, request.pace, start, allocation, attractions, dining,
                    hotel if n < days else None,
                )
                for n in range(1, days + 1)
            ]

            total_activity_cost = sum(d.total_cost for d in itinerary_days)
            source = places[0].source if places else "generic"

            return Itinerary(
                destination=city,
                destination_country=country or "Unknown",
                total_days=days,
                total_budget=total_budget,
                total_budget_original=request.total_budget,
                original_currency=request.currency.upper(),
                pace=request.pace,
                currency=self.currency.canonical,
                exchange_rate=self.currency.rate_for(request.currency),
                days=itinerary_days,
                hotels=[hotel],
                total_hotel_cost=hotel.total_cost,
                total_activity_cost=total_activity_cost,
                tips=self._build_tips(city, request.pace, len(places), source, bool(narrative)),
                info=get_destination_info(country),
                narrative_enrichment=narrative or None,
                place_source=source,
            )
        except Exception as e:
            logger.exception(f"Failed to generate itinerary for {city}")
            raise ItineraryGenerationError(str(e)) from e

    # ------------------------------------------------------------------ #
    # External data
    # ------------------------------------------------------------------ #
    def _fetch_external(self, city: str, budget: int, days: int, pace: str) -> Tuple[List[Place], str]:
        """Fetch places and narrative concurrently.

        The narrative is waited on for at most its own timeout; a late reply
        is dropped. In-flight calls are not cancelled.
        """
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="itinerary")
        try:
            places_future = executor.submit(self.place_provider.fetch_places, city)
            narrative_future = executor.submit(
                self.narrative_provider.fetch_narrative, city, budget, days, pace
            )

            try:
                places = places_future.result()
            except Exception as e:
                logger.error(f"Place lookup failed for {city}, using generic places: {e}")
                places = GenericPlaceTier().fetch(city)

            try:
                narrative = narrative_future.result(timeout=self.narrative_provider.timeout)
            except FutureTimeoutError:
                logger.warning(f"Narrative enrichment for {city} timed out")
                narrative = ""
            except Exception as e:
                logger.warning(f"Narrative enrichment failed for {city}: {e}")
                narrative = ""
        finally:
            executor.shutdown(wait=False)

        return places, narrative or ""

    # ------------------------------------------------------------------ #
    # Hotel
    # ------------------------------------------------------------------ #
    def _amount_in_usd(self, request: TripRequest) -> float:
        if request.currency.upper() == "USD":
            return float(request.total_budget)
        canonical = self.currency.to_canonical(request.total_budget, request.currency)
        return self.currency.from_canonical(canonical, "USD")

    @staticmethod
    def select_hotel_tier(per_day_usd: float) -> str:
        budget_limit, midrange_limit = HOTEL_TIER_THRESHOLDS_USD
        if per_day_usd < budget_limit:
            return "budget"
        if per_day_usd < midrange_limit:
            return "midrange"
        return "luxury"

    def _build_hotel(self, city: str, tier: str, days: int, start: date) -> Hotel:
        template = HOTEL_TEMPLATES[tier]
        names = template["names"]
        hotel_name = names[len(city) % len(names)]
        slug = re.sub(r"[^a-z0-9]", "", hotel_name.lower())
        nights = days - 1
        nightly = self.currency.to_canonical(template["price_per_night_usd"], "USD")

        return Hotel(
            id="hotel_1",
            name=f"{city} {hotel_name}",
            tier=tier,
            price_per_night=nightly,
            price_per_night_original=template["price_per_night_usd"],
            rating=template["rating"],
            amenities=list(template["amenities"]),
            description=f"A comfortable {tier} hotel in the heart of {city}, perfect for your stay.",
            address=f"{city} City Center",
            check_in=start,
            check_out=start + timedelta(days=nights),
            total_nights=nights,
            total_cost=nightly * nights,
            contact={
                "phone": "+91-XXX-XXX-XXXX",
                "email": f"reservations@{slug}.com",
                "website": f"www.{slug}.com",
            },
        )

    # ------------------------------------------------------------------ #
    # Days
    # ------------------------------------------------------------------ #
    def _build_day(
        self,
        day_number: int,
        city: str,
        pace: str,
        start: date,
        allocation: Allocation,
        attractions: List[Place],
        dining: List[Place],
        hotel: Optional[Hotel],
    ) -> Day:
        # Places are reused once exhausted rather than leaving slots empty
        first = ((day_number - 1) * 2) % len(attractions)
        second = ((day_number - 1) * 2 + 1) % len(attractions)
        morning_place = attractions[first]
        afternoon_place = attractions[second]
        dining_place = dining[(day_number - 1) % len(dining)] if dining else None

        remaining = allocation.activity_envelope

        def clamp(estimate: int) -> int:
            nonlocal remaining
            cost = max(0, min(estimate, remaining))
            remaining -= cost
            return cost

        morning = Activity(
            id=f"landmark_m{day_number}",
            name=morning_place.name,
            category=morning_place.category,
            time="9:00 AM",
            duration="2 hours" if pace == "easy" else "2.5 hours",
            cost=clamp(self.allocator.estimate_cost(morning_place.category, morning_place.price_level)),
            rating=morning_place.rating,
            description=morning_place.description or f"Explore the famous landmarks of {city}",
            address=morning_place.address,
            tips="Visit early morning to avoid crowds and get the best photos" if pace == "hard" else None,
            image_url=morning_place.image_url,
        )
        afternoon = Activity(
            id=f"landmark_a1{day_number}",
            name=afternoon_place.name,
            category=afternoon_place.category,
            time="2:00 PM",
            duration="1.5 hours" if pace == "easy" else "2 hours",
            cost=clamp(self.allocator.estimate_cost(afternoon_place.category, afternoon_place.price_level)),
            rating=afternoon_place.rating,
            description=afternoon_place.description or f"Continue your cultural journey in {city}",
            address=afternoon_place.address,
            image_url=afternoon_place.image_url,
        )

        if dining_place is not None:
            meal = Activity(
                id=f"dining_a2{day_number}",
                name=dining_place.name,
                category="dining",
                time="6:00 PM",
                duration="1 hour",
                cost=clamp(self.allocator.estimate_cost("dining", dining_place.price_level)),
                rating=dining_place.rating,
                description=dining_place.description or f"Experience authentic {city} cuisine",
                address=dining_place.address,
                image_url=dining_place.image_url,
            )
        else:
            meal = Activity(
                id=f"dining_a2{day_number}",
                name=f"{city} Traditional Restaurant",
                category="dining",
                time="6:00 PM",
                duration="1 hour",
                cost=clamp(self.allocator.estimate_cost("dining", 2)),
                rating=4.2,
                description=f"Experience authentic {city} cuisine",
                address=f"{city} Food District",
            )

        walk = Activity(
            id=f"evening_{day_number}",
            name=f"{city} Evening Walk",
            category="activity",
            time="8:00 PM",
            duration="1 hour",
            cost=0,
            rating=4.0,
            description=f"Peaceful evening walk through {city}'s historic streets",
            address=f"{city} Old City",
            tips="Perfect time to witness local evening traditions and capture beautiful sunset photos",
        )

        day = Day(
            day_number=day_number,
            date=start + timedelta(days=day_number - 1),
            total_cost=0,
            summary=f"Day {day_number}: Explore {city}'s authentic landmarks and culture",
            highlights=list(DAY_HIGHLIGHTS.get(day_number, LATER_DAY_HIGHLIGHTS)),
            morning=[morning],
            afternoon=[afternoon, meal],
            evening=[walk],
            hotel=hotel,
        )
        day.total_cost = sum(a.cost for a in day.activities)
        return day

    # ------------------------------------------------------------------ #
    # Tips
    # ------------------------------------------------------------------ #
    @staticmethod
    def _build_tips(city: str, pace: str, place_count: int, source: str, has_narrative: bool) -> List[str]:
        tips = [
            f"Learn basic local phrases - {city} locals appreciate the effort",
            "Keep copies of important documents separate from originals",
            "Download offline maps in case of poor internet connection",
            f"Research {city}'s tipping customs and local etiquette",
            "Book popular attractions in advance to avoid disappointment",
            f"Try to use public transportation - it's often the most authentic way to experience {city}",
        ]
        if pace == "hard":
            tips += [
                "All prices are shown in Indian Rupees (INR)",
                "Currency exchange rates are updated daily",
            ]
        if source == "live":
            tips.append(
                f"Real landmarks from Google Maps: {place_count} places with verified locations and ratings"
            )
        elif source == "curated":
            tips.append(f"Includes {place_count} hand-picked landmarks famous in {city}")
        if has_narrative:
            tips.append("Enhanced with AI-powered cultural insights")
        return tips

    # ------------------------------------------------------------------ #
    # Health
    # ------------------------------------------------------------------ #
    def integration_status(self, probe: bool = False) -> Dict[str, bool]:
        """Report which external integrations are configured (or reachable)."""
        if probe:
            return {
                "googleMaps": self.place_provider.check_health(),
                "narrative": self.narrative_provider.check_health(),
            }
        return {
            "googleMaps": self.place_provider.live_enabled,
            "narrative": self.narrative_provider.enabled,
        }


__all__ = ["ItineraryService", "ItineraryGenerationError", "HOTEL_TEMPLATES"]
