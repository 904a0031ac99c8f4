# wanderai/routes/travel.py
"""Travel routes and blueprint configuration."""

import logging
from datetime import datetime, timezone

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from wanderai.api.config import get_google_maps_config, get_narrative_config, is_development
from wanderai.api.currency import CurrencyNormalizer
from wanderai.api.destinations import get_city_info
from wanderai.api.schemas import ItineraryRequestSchema, validation_details
from wanderai.api.services.auth_service import admin_required, login_required
from wanderai.api.services.export_service import EXPORT_FORMATS, ExportService
from wanderai.api.services.itinerary_service import ItineraryGenerationError, ItineraryService

logger = logging.getLogger(__name__)


def create_travel_blueprint(itinerary_service: ItineraryService):
    """Create and configure the travel blueprint.

    Args:
        itinerary_service: Assembler used by the generation endpoints

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint("travel", __name__, url_prefix="/api")

    def _validated_request():
        payload = request.get_json(silent=True) or {}
        return ItineraryRequestSchema.model_validate(payload).to_trip_request()

    def _invalid(e: ValidationError):
        logger.info(f"Validation error: {e.error_count()} problem(s)")
        return jsonify({
            "success": False,
            "error": "Invalid input data",
            "details": validation_details(e),
        }), 400

    def _failed(e: ItineraryGenerationError):
        message = str(e) if is_development() else "Failed to generate itinerary"
        return jsonify({"success": False, "error": message}), 500

    @travel_bp.route("/itinerary/generate", methods=["POST"])
    @login_required
    def generate_itinerary():
        """Generate a new itinerary."""
        try:
            trip = _validated_request()
        except ValidationError as e:
            return _invalid(e)

        try:
            itinerary = itinerary_service.generate(trip)
        except ItineraryGenerationError as e:
            return _failed(e)

        return jsonify({"success": True, "data": itinerary.to_dict()})

    @travel_bp.route("/itinerary/export", methods=["POST"])
    @login_required
    def export_itinerary():
        """Generate an itinerary and return it as a text or CSV download."""
        fmt = request.args.get("format", "txt").lower()
        if fmt not in EXPORT_FORMATS:
            return jsonify({
                "success": False,
                "error": f"Unsupported export format: {fmt}",
            }), 400

        try:
            trip = _validated_request()
        except ValidationError as e:
            return _invalid(e)

        try:
            itinerary = itinerary_service.generate(trip)
        except ItineraryGenerationError as e:
            return _failed(e)

        body = ExportService.render(itinerary, fmt)
        filename = ExportService.filename(itinerary, fmt)
        return Response(
            body,
            mimetype=EXPORT_FORMATS[fmt].split(";")[0],
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @travel_bp.route("/city/<city>")
    def city_info(city):
        return jsonify({"success": True, "data": get_city_info(city)})

    @travel_bp.route("/city-info")
    def city_info_query():
        city = (request.args.get("city") or "").strip()
        if not city:
            return jsonify({"success": False, "error": "City parameter is required"}), 400
        return jsonify({"success": True, "data": get_city_info(city)})

    @travel_bp.route("/budget-range")
    def budget_range():
        """Suggested trip budgets per tier for a number of days."""
        days = request.args.get("days", default=3, type=int)
        if days < 1 or days > 14:
            return jsonify({"success": False, "error": "Days must be between 1 and 14"}), 400
        return jsonify({
            "success": True,
            "currency": itinerary_service.currency.canonical,
            "data": CurrencyNormalizer.recommended_budget_range(days),
        })

    @travel_bp.route("/health")
    def health():
        """Report availability of each external integration."""
        probe = request.args.get("probe", "").lower() in ("1", "true", "yes")
        apis = itinerary_service.integration_status(probe=probe)
        healthy = any(apis.values())
        return jsonify({
            "success": True,
            "status": "healthy" if healthy else "degraded",
            "apis": apis,
            "message": (
                "API integrations are configured"
                if healthy
                else "No external APIs configured - using fallback data"
            ),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    @travel_bp.route("/config")
    @admin_required
    def api_config():
        """Which API keys are configured; secrets are never returned."""
        apis = {
            "googlemaps": bool(get_google_maps_config().get("api_key")),
            "narrative": bool(get_narrative_config().get("api_key")),
        }
        configured = sum(apis.values())
        return jsonify({
            "success": True,
            "configured": configured,
            "total": len(apis),
            "percentage": round(configured / len(apis) * 100),
            "apis": apis,
            "googleMaps": {
                "configured": apis["googlemaps"],
                "note": (
                    "API key configured - check required APIs are enabled"
                    if apis["googlemaps"]
                    else "API key not configured"
                ),
            },
            "narrative": {
                "configured": apis["narrative"],
                "note": (
                    "API key configured - AI insights enabled"
                    if apis["narrative"]
                    else "API key not configured - itineraries are built without AI insights"
                ),
            },
            "recommendations": {
                "setup": [
                    "Set environment variables in your .env file",
                    "For Google Maps: enable the Geocoding API and Places API",
                    "For AI insights: set NARRATIVE_API_KEY (an OpenRouter key works)",
                    "Restart the server after adding new API keys",
                    "Check API quotas and rate limits",
                ],
                "googleMapsSetup": [
                    "1. Go to Google Cloud Console (console.cloud.google.com)",
                    "2. Create or select a project",
                    "3. Enable these APIs: Geocoding API, Places API",
                    "4. Create credentials (API Key)",
                    "5. Restrict the API key to your server's IP",
                    "6. Set the GOOGLE_MAPS_API_KEY environment variable",
                ],
                "narrativeSetup": [
                    "1. Create an account with an OpenAI-compatible provider such as OpenRouter",
                    "2. Set NARRATIVE_API_KEY, and optionally NARRATIVE_BASE_URL and NARRATIVE_MODEL",
                ],
            },
        })

    @travel_bp.route("/test-google-maps")
    def test_google_maps():
        """Check maps connectivity with a sample lookup."""
        provider = itinerary_service.place_provider
        if not provider.live_enabled:
            return jsonify({
                "success": False,
                "error": "Google Maps API key not configured",
                "available": False,
                "connection": False,
            })

        sample = provider.maps.geocode_city("Mumbai")
        connected = sample is not None
        return jsonify({
            "success": True,
            "available": True,
            "connection": connected,
            "sampleData": sample.to_dict() if sample else None,
            "message": (
                "Google Maps API is working correctly"
                if connected
                else "Google Maps API is configured but not responding"
            ),
        })

    return travel_bp


__all__ = ["create_travel_blueprint"]
