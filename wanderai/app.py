# wanderai/app.py
"""Flask application factory."""

import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from wanderai.api.config import (
    get_google_maps_api_key,
    get_narrative_config,
    is_development,
    should_seed_demo_users,
)
from wanderai.api.services.auth_service import AuthService
from wanderai.api.services.itinerary_service import ItineraryService
from wanderai.api.users import UserRepository
from wanderai.routes import create_auth_blueprint, create_travel_blueprint

logger = logging.getLogger(__name__)


def create_app(
    itinerary_service: Optional[ItineraryService] = None,
    users: Optional[UserRepository] = None,
    jwt_config: Optional[Dict[str, Any]] = None,
    seed_demo_users: Optional[bool] = None,
) -> Flask:
    """Build the API application.

    Collaborators can be injected for tests; by default they are built from
    environment configuration.
    """
    app = Flask(__name__)

    flask_secret_key = os.getenv("FLASK_SECRET_KEY") or os.urandom(32).hex()
    if "FLASK_SECRET_KEY" not in os.environ:
        logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
    app.secret_key = flask_secret_key
    app.json.sort_keys = False

    CORS(app, origins="*")

    logger.info("Environment status:")
    logger.info(f"- GOOGLE_MAPS_API_KEY: {'configured' if get_google_maps_api_key() else 'not configured'}")
    logger.info(f"- NARRATIVE_API_KEY: {'configured' if get_narrative_config()['api_key'] else 'not configured'}")

    users = users if users is not None else UserRepository()
    if seed_demo_users is None:
        seed_demo_users = should_seed_demo_users()
    if seed_demo_users:
        users.seed_demo_users()

    auth = AuthService(users, jwt_config)
    itinerary_service = itinerary_service or ItineraryService()

    app.extensions["wanderai.auth"] = auth
    app.extensions["wanderai.itinerary"] = itinerary_service

    app.register_blueprint(create_auth_blueprint(auth))
    app.register_blueprint(create_travel_blueprint(itinerary_service))

    @app.route("/api/ping")
    def ping():
        return {"message": os.getenv("PING_MESSAGE", "ping")}

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "error": e.description}), e.code
        logger.exception("Unhandled server error")
        message = str(e) if is_development() else "Internal server error"
        return jsonify({"success": False, "error": message}), 500

    return app


__all__ = ["create_app"]
