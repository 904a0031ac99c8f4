import threading
from datetime import date

import pytest

from wanderai.api.budget import BudgetAllocator
from wanderai.api.currency import CurrencyNormalizer
from wanderai.api.destinations import LandmarkDataset
from wanderai.api.geocoding import MapsClient
from wanderai.api.models import TripRequest
from wanderai.api.places import CuratedPlaceTier, GenericPlaceTier, PlaceProvider
from wanderai.api.services.itinerary_service import ItineraryGenerationError, ItineraryService

from tests.conftest import FakeNarrative


def _service(narrative=None, places=None):
    return ItineraryService(
        place_provider=places or PlaceProvider(maps=MapsClient(api_key="")),
        narrative_provider=narrative or FakeNarrative(),
        allocator=BudgetAllocator(),
        currency=CurrencyNormalizer(),
    )


class SlowNarrative(FakeNarrative):
    timeout = 0.05

    def __init__(self):
        super().__init__(text="too late")
        self.release = threading.Event()

    def fetch_narrative(self, city, budget, days, pace):
        self.release.wait(2)
        return self.text


@pytest.mark.parametrize("days", list(range(1, 15)))
def test_day_count_numbering_and_hotel_nights(service, days):
    itinerary = service.generate(TripRequest("Atlantis", 5000, days, "medium"))
    assert [d.day_number for d in itinerary.days] == list(range(1, days + 1))

    hotel = itinerary.hotels[0]
    assert hotel.total_nights == days - 1
    assert all(d.hotel is hotel for d in itinerary.days[:-1])
    assert itinerary.days[-1].hotel is None
    for day in itinerary.days:
        assert len(day.morning) == 1
        assert len(day.afternoon) == 2
        assert len(day.evening) == 1
        assert all(a.cost >= 0 for a in day.activities)
        assert day.total_cost == sum(a.cost for a in day.activities)


def test_mathura_three_day_trip(service, place_provider):
    itinerary = service.generate(
        TripRequest("Mathura", 1000, 3, "medium", start_date=date(2026, 3, 5))
    )
    assert place_provider.calls == ["Mathura"]
    assert itinerary.destination_country == "India"
    assert itinerary.place_source == "curated"
    assert itinerary.total_budget == 83250
    assert itinerary.currency == "INR"
    assert itinerary.original_currency == "USD"
    assert itinerary.exchange_rate == 83.25

    day1, day2, day3 = itinerary.days
    assert [a.name for a in day1.morning + day1.afternoon[:1]] == [
        "Krishna Janmabhoomi Temple",
        "Dwarkadhish Temple",
    ]
    assert day2.morning[0].name == "Vishram Ghat"
    assert day1.afternoon[1].name == "Brijwasi Mithai Wala"
    assert day1.to_dict()["date"] == "March 5, 2026"
    assert day3.to_dict()["date"] == "March 7, 2026"

    hotel = itinerary.hotels[0]
    assert hotel.tier == "luxury"
    assert hotel.name == "Mathura Luxury Suites"
    assert hotel.price_per_night == 16650
    assert hotel.total_nights == 2
    assert itinerary.total_hotel_cost == 33300
    assert hotel.check_out == date(2026, 3, 7)

    # attractions are price level 1 (50), the sweet shop is level 2 (800)
    assert [d.total_cost for d in itinerary.days] == [900, 900, 900]
    assert itinerary.total_activity_cost == 2700
    assert len(itinerary.tips) >= 5
    assert itinerary.info.emergency_contacts["medical"] == "108"


def test_long_cheap_trip_never_goes_negative(service):
    itinerary = service.generate(TripRequest("Mathura", 100, 14, "hard"))
    assert itinerary.hotels[0].tier == "budget"
    assert all(a.cost == 0 for d in itinerary.days for a in d.activities)
    assert itinerary.total_activity_cost == 0


def test_non_usd_budget_is_normalized():
    itinerary = _service().generate(TripRequest("Paris", 1000, 2, "easy", currency="eur"))
    assert itinerary.total_budget == 90500
    assert itinerary.total_budget_original == 1000
    assert itinerary.original_currency == "EUR"
    assert itinerary.destination_country == "France"
    assert itinerary.hotels[0].tier == "luxury"


def test_narrative_failure_degrades_gracefully():
    narrative = FakeNarrative(error=RuntimeError("upstream 502"))
    itinerary = _service(narrative=narrative).generate(TripRequest("Mathura", 1000, 3, "medium"))
    assert narrative.calls == 1
    assert itinerary.narrative_enrichment is None
    assert itinerary.to_dict()["aiInsights"] is None
    assert len(itinerary.days) == 3
    assert itinerary.days[0].morning[0].name == "Krishna Janmabhoomi Temple"


def test_narrative_text_is_attached():
    itinerary = _service(narrative=FakeNarrative(text="Try the pedas.")).generate(
        TripRequest("Mathura", 1000, 2, "medium")
    )
    assert itinerary.narrative_enrichment == "Try the pedas."
    assert "Enhanced with AI-powered cultural insights" in itinerary.tips


def test_slow_narrative_is_dropped():
    narrative = SlowNarrative()
    try:
        itinerary = _service(narrative=narrative).generate(TripRequest("Agra", 500, 2, "easy"))
    finally:
        narrative.release.set()
    assert itinerary.narrative_enrichment is None
    assert itinerary.days[0].morning[0].name == "Taj Mahal"


def test_places_wrap_around_and_missing_dining_is_synthesized():
    itinerary = _service().generate(TripRequest("Delhi", 2000, 3, "medium"))
    day3 = itinerary.days[2]
    assert day3.morning[0].name == "Humayun's Tomb"
    assert day3.afternoon[0].name == "Red Fort (Lal Qila)"
    assert all(d.afternoon[1].name == "Delhi Traditional Restaurant" for d in itinerary.days)


def test_place_provider_failure_falls_back_to_generic():
    class Exploding(PlaceProvider):
        def fetch_places(self, destination):
            raise RuntimeError("maps down")

    service = _service(places=Exploding(maps=MapsClient(api_key="")))
    itinerary = service.generate(TripRequest("Lima", 800, 2, "medium"))
    assert itinerary.place_source == "generic"
    assert itinerary.days[0].morning[0].name == "Lima Heritage Museum"


def test_curated_only_provider():
    dataset = LandmarkDataset({"gotham": [
        {"id": "g1", "name": "Wayne Tower", "category": "attraction", "price_level": 4},
    ]})
    provider = PlaceProvider(maps=MapsClient(api_key=""), tiers=[CuratedPlaceTier(dataset), GenericPlaceTier()])
    itinerary = _service(places=provider).generate(TripRequest("Gotham", 5000, 2, "hard"))
    assert {a.name for d in itinerary.days for a in d.morning + d.afternoon[:1]} == {"Wayne Tower"}
    assert "All prices are shown in Indian Rupees (INR)" in itinerary.tips


def test_unsupported_currency_raises_generation_error():
    with pytest.raises(ItineraryGenerationError):
        _service().generate(TripRequest("Paris", 1000, 2, "medium", currency="XYZ"))


@pytest.mark.parametrize(
    "per_day,tier",
    [(10, "budget"), (99.99, "budget"), (100, "midrange"), (249.99, "midrange"), (250, "luxury")],
)
def test_hotel_tier_thresholds(per_day, tier):
    assert ItineraryService.select_hotel_tier(per_day) == tier


def test_integration_status_without_keys(service):
    assert service.integration_status() == {"googleMaps": False, "narrative": False}


def test_activity_places_keep_their_category_and_price_row():
    dataset = LandmarkDataset({"zootown": [
        {"id": "z1", "name": "City Zoo", "category": "activity", "price_level": 2},
        {"id": "m1", "name": "Town Museum", "category": "attraction", "price_level": 2},
    ]})
    provider = PlaceProvider(maps=MapsClient(api_key=""), tiers=[CuratedPlaceTier(dataset)])
    day = _service(places=provider).generate(TripRequest("Zootown", 5000, 1, "hard")).days[0]

    zoo, museum = day.morning[0], day.afternoon[0]
    assert (zoo.name, zoo.category, zoo.cost) == ("City Zoo", "activity", 400)
    assert (museum.name, museum.category, museum.cost) == ("Town Museum", "attraction", 200)
