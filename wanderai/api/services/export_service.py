# wanderai/api/services/export_service.py
"""Plain-text and CSV renderings of an itinerary for download or sharing."""

import csv
import io
import logging
import re

from wanderai.api.currency import CurrencyNormalizer
from wanderai.api.models import Itinerary

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Day", "Date", "Time", "Activity", "Type", "Duration", "Cost", "Address", "Description"]

EXPORT_FORMATS = {
    "txt": "text/plain; charset=utf-8",
    "csv": "text/csv; charset=utf-8",
}


class ExportService:
    """Formats assembled itineraries for export."""

    @staticmethod
    def filename(itinerary: Itinerary, fmt: str) -> str:
        base = re.sub(r"[^a-zA-Z0-9]", "_", itinerary.destination)
        return f"{base}_itinerary.{fmt}"

    @staticmethod
    def to_text(itinerary: Itinerary) -> str:
        """Render a printable text version of the trip."""
        cur = itinerary.currency
        money = CurrencyNormalizer(canonical=cur).format_amount
        lines = [
            f"{itinerary.destination} Travel Itinerary",
            f"{itinerary.total_days} days • {money(itinerary.total_budget)} budget • {itinerary.pace} pace",
            "",
        ]

        for day in itinerary.days:
            d = day.to_dict()
            lines += [
                f"DAY {day.day_number} - {d['date']}",
                f"Budget: {money(day.total_cost)}",
                day.summary,
                "",
            ]
            for label, slot in (("MORNING", day.morning), ("AFTERNOON", day.afternoon), ("EVENING", day.evening)):
                lines.append(f"{label}:")
                lines += [f"• {a.time} - {a.name} ({a.duration}) - {money(a.cost)}" for a in slot]
                lines.append("")
            if day.hotel:
                lines += [f"STAY: {day.hotel.name} ({money(day.hotel.price_per_night)}/night)", ""]
            lines += ["---", ""]

        lines.append("TRAVEL TIPS:")
        lines += [f"• {tip}" for tip in itinerary.tips]
        return "\n".join(lines)

    @staticmethod
    def to_csv(itinerary: Itinerary) -> str:
        """One row per activity, in day and slot order."""
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for day in itinerary.days:
            date_label = day.to_dict()["date"]
            for a in day.activities:
                writer.writerow([
                    day.day_number,
                    date_label,
                    a.time,
                    a.name,
                    a.category,
                    a.duration,
                    a.cost,
                    a.address,
                    a.description,
                ])
        return buf.getvalue()

    @staticmethod
    def render(itinerary: Itinerary, fmt: str) -> str:
        if fmt == "txt":
            return ExportService.to_text(itinerary)
        if fmt == "csv":
            return ExportService.to_csv(itinerary)
        raise ValueError(f"Unsupported export format: {fmt}")

    @staticmethod
    def share_text(itinerary: Itinerary) -> str:
        return (
            f"Check out my {itinerary.total_days}-day trip to {itinerary.destination}! "
            "Generated by WanderAI."
        )


__all__ = ["ExportService", "EXPORT_FORMATS", "CSV_HEADERS"]
