import csv
import io

import pytest

from wanderai.api.models import TripRequest
from wanderai.api.services.export_service import CSV_HEADERS, ExportService


@pytest.fixture
def itinerary(service):
    return service.generate(TripRequest("New York", 1500, 3, "medium"))


def test_csv_has_one_row_per_activity(itinerary):
    rows = list(csv.reader(io.StringIO(ExportService.to_csv(itinerary))))
    assert rows[0] == CSV_HEADERS
    assert len(rows) == 1 + 4 * 3
    assert rows[1][0] == "1"
    assert rows[-1][3] == "New York Evening Walk"


def test_text_export_lists_days_and_tips(itinerary):
    text = ExportService.render(itinerary, "txt")
    assert text.startswith("New York Travel Itinerary")
    assert "3 days • ₹124,875 budget • medium pace" in text
    assert "DAY 1 - " in text
    assert "DAY 3 - " in text
    assert "STAY: New York" in text
    assert "TRAVEL TIPS:" in text


def test_filename_is_sanitized(itinerary):
    assert ExportService.filename(itinerary, "csv") == "New_York_itinerary.csv"


def test_unknown_format_rejected(itinerary):
    with pytest.raises(ValueError):
        ExportService.render(itinerary, "pdf")


def test_share_text(itinerary):
    assert ExportService.share_text(itinerary) == (
        "Check out my 3-day trip to New York! Generated by WanderAI."
    )
