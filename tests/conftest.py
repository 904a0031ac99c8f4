import pytest

from wanderai.api.budget import BudgetAllocator
from wanderai.api.currency import CurrencyNormalizer
from wanderai.api.geocoding import MapsClient
from wanderai.api.llm import NarrativeProvider
from wanderai.api.places import PlaceProvider
from wanderai.api.services.itinerary_service import ItineraryService
from wanderai.api.users import UserRepository
from wanderai.app import create_app

JWT_CONFIG = {"secret": "test-secret", "algorithm": "HS256", "expires_days": 7}


class SpyPlaceProvider(PlaceProvider):
    """Offline place provider that records lookups."""

    def __init__(self):
        super().__init__(maps=MapsClient(api_key=""))
        self.calls = []

    def fetch_places(self, destination):
        self.calls.append(destination)
        return super().fetch_places(destination)


class FakeNarrative:
    enabled = True
    timeout = 1.0

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = 0

    def fetch_narrative(self, city, budget, days, pace):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text

    def check_health(self):
        return self.error is None


@pytest.fixture
def place_provider():
    return SpyPlaceProvider()


@pytest.fixture
def offline_narrative():
    return NarrativeProvider(config={"api_key": "", "timeout": 1})


@pytest.fixture
def service(place_provider, offline_narrative):
    return ItineraryService(
        place_provider=place_provider,
        narrative_provider=offline_narrative,
        allocator=BudgetAllocator(),
        currency=CurrencyNormalizer(),
    )


@pytest.fixture
def app(service):
    app = create_app(
        itinerary_service=service,
        users=UserRepository(),
        jwt_config=JWT_CONFIG,
        seed_demo_users=True,
    )
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, email, password):
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["token"]


@pytest.fixture
def user_headers(client):
    return {"Authorization": f"Bearer {_login(client, 'user@wanderai.com', 'password123')}"}


@pytest.fixture
def admin_headers(client):
    return {"Authorization": f"Bearer {_login(client, 'admin@wanderai.com', 'admin123')}"}
