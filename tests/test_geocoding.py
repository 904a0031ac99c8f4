from googlemaps import exceptions as gmaps_errors

from wanderai.api.geocoding import GEOCODE_CACHE_SIZE, MapsClient


class FakeGmaps:
    def __init__(self, geocode_result=None, nearby=None, error=None):
        self.geocode_result = geocode_result or []
        self.nearby = nearby or {}
        self.error = error
        self.geocode_calls = 0

    def geocode(self, address, language=None):
        self.geocode_calls += 1
        if self.error:
            raise self.error
        return self.geocode_result

    def places_nearby(self, location=None, radius=None, type=None):
        if self.error:
            raise self.error
        return self.nearby.get(type, {"status": "ZERO_RESULTS", "results": []})


PARIS = [{
    "geometry": {"location": {"lat": 48.8566, "lng": 2.3522}},
    "address_components": [
        {"long_name": "Paris", "types": ["locality"]},
        {"long_name": "France", "types": ["country", "political"]},
    ],
}]


def _client(fake):
    maps = MapsClient(api_key="AIzaTestKey", timeout=1)
    maps._gmaps = fake
    return maps


def test_disabled_without_key():
    maps = MapsClient(api_key="")
    assert not maps.enabled
    assert maps.geocode_city("Paris") is None
    assert maps.search_nearby(0, 0, 1000, "restaurant") == []


def test_geocode_extracts_country_and_caches():
    fake = FakeGmaps(geocode_result=PARIS)
    maps = _client(fake)
    loc = maps.geocode_city("Paris")
    assert (loc.lat, loc.lng, loc.country) == (48.8566, 2.3522, "France")
    assert maps.geocode_city(" paris ") == loc
    assert fake.geocode_calls == 1


def test_geocode_request_denied_returns_none():
    maps = _client(FakeGmaps(error=gmaps_errors.ApiError("REQUEST_DENIED", "key not authorized")))
    assert maps.geocode_city("Paris") is None


def test_geocode_timeout_returns_none():
    maps = _client(FakeGmaps(error=gmaps_errors.Timeout()))
    assert maps.geocode_city("Paris") is None


def test_geocode_no_results():
    assert _client(FakeGmaps(geocode_result=[])).geocode_city("Nowhere") is None


def test_search_nearby_filters_rating_and_limits():
    results = [{"place_id": str(i), "name": f"P{i}", "rating": 3.5 + i * 0.1} for i in range(15)]
    fake = FakeGmaps(nearby={"tourist_attraction": {"status": "OK", "results": results}})
    found = _client(fake).search_nearby(1, 2, 10000, "tourist_attraction", min_rating=4.0, limit=8)
    assert len(found) == 8
    assert all(p["rating"] >= 4.0 for p in found)


def test_search_nearby_non_ok_status():
    fake = FakeGmaps(nearby={"restaurant": {"status": "OVER_QUERY_LIMIT", "results": []}})
    assert _client(fake).search_nearby(1, 2, 5000, "restaurant") == []


def test_search_nearby_transport_error():
    fake = FakeGmaps(error=gmaps_errors.TransportError("connection reset"))
    assert _client(fake).search_nearby(1, 2, 5000, "restaurant") == []


class AnyCityGmaps(FakeGmaps):
    def geocode(self, address, language=None):
        self.geocode_calls += 1
        return PARIS


def test_geocode_cache_is_bounded():
    fake = AnyCityGmaps()
    maps = MapsClient(api_key="AIzaTestKey", timeout=1, cache_size=3)
    maps._gmaps = fake
    for name in ("a", "b", "c"):
        maps.geocode_city(name)
    maps.geocode_city("a")  # refreshes "a"
    maps.geocode_city("d")
    assert list(maps._geocoding_cache) == ["c", "a", "d"]

    maps.geocode_city("b")
    assert fake.geocode_calls == 5
    assert len(maps._geocoding_cache) == 3


def test_default_cache_size():
    maps = _client(AnyCityGmaps())
    for i in range(GEOCODE_CACHE_SIZE + 50):
        maps.geocode_city(f"city {i}")
    assert len(maps._geocoding_cache) == GEOCODE_CACHE_SIZE


def test_base_url_reaches_client():
    maps = MapsClient(api_key="AIzaTestKey", timeout=1, base_url="https://proxy.example")
    assert maps._get_client().base_url == "https://proxy.example"


def test_base_url_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_BASE_URL", "https://maps-proxy.internal")
    maps = MapsClient(api_key="AIzaTestKey", timeout=1)
    assert maps._get_client().base_url == "https://maps-proxy.internal"
