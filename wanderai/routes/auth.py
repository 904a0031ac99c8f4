# wanderai/routes/auth.py
"""Authentication routes."""

import logging

from flask import Blueprint, g, jsonify, request
from pydantic import ValidationError

from wanderai.api.schemas import LoginSchema, SignupSchema, validation_details
from wanderai.api.services.auth_service import AuthService, admin_required, login_required

logger = logging.getLogger(__name__)


def create_auth_blueprint(auth: AuthService):
    """Create the blueprint serving login, signup and the admin user list."""
    auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

    def _invalid(e: ValidationError):
        return jsonify({
            "success": False,
            "error": "Invalid input data",
            "details": validation_details(e),
        }), 400

    @auth_bp.route("/login", methods=["POST"])
    def login():
        try:
            data = LoginSchema.model_validate(request.get_json(silent=True) or {})
        except ValidationError as e:
            return _invalid(e)

        user = auth.authenticate(data.email, data.password)
        if user is None:
            return jsonify({"success": False, "error": "Invalid email or password"}), 401

        logger.info(f"Login successful for user {user.id}")
        return jsonify({
            "success": True,
            "user": user.to_dict(),
            "token": auth.create_token(user),
            "message": "Login successful",
        })

    @auth_bp.route("/signup", methods=["POST"])
    def signup():
        try:
            data = SignupSchema.model_validate(request.get_json(silent=True) or {})
        except ValidationError as e:
            return _invalid(e)

        if auth.users.find_by_email(data.email) is not None:
            return jsonify({
                "success": False,
                "error": "An account with this email already exists",
            }), 409

        try:
            user = auth.users.create(data.email, data.name, data.password)
        except ValueError as e:
            # lost a race with a concurrent signup for the same email
            return jsonify({"success": False, "error": str(e)}), 409

        return jsonify({
            "success": True,
            "user": user.to_dict(),
            "token": auth.create_token(user),
            "message": "Account created successfully",
        }), 201

    @auth_bp.route("/verify")
    @login_required
    def verify():
        return jsonify({"success": True, "user": g.user.to_dict()})

    @auth_bp.route("/users")
    @admin_required
    def list_users():
        users = [u.to_dict() for u in auth.users.list_all()]
        return jsonify({"success": True, "data": users, "total": len(users)})

    return auth_bp


__all__ = ["create_auth_blueprint"]
