# wanderai/api/services/auth_service.py
"""JWT issuing and verification."""

import logging
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Any, Dict, Optional

import jwt
from flask import current_app, g, jsonify, request

from wanderai.api.config import get_jwt_config
from wanderai.api.users import User, UserRepository

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Authentication failure with a client-facing reason."""

    def __init__(self, message: str, status: int = 401):
        super().__init__(message)
        self.message = message
        self.status = status


class AuthService:
    def __init__(self, users: UserRepository, config: Optional[Dict[str, Any]] = None):
        self.users = users
        self.config = config or get_jwt_config()

    def create_token(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user.id,
            "iat": now,
            "exp": now + timedelta(days=self.config["expires_days"]),
        }
        return jwt.encode(payload, self.config["secret"], algorithm=self.config["algorithm"])

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.users.find_by_email(email)
        if user is None or not user.check_password(password):
            return None
        return user

    def user_from_token(self, token: Optional[str]) -> User:
        """Decode ``token`` and load its user, raising AuthError with the reason."""
        if not token:
            raise AuthError("Access token required")
        try:
            decoded = jwt.decode(token, self.config["secret"], algorithms=[self.config["algorithm"]])
        except jwt.ExpiredSignatureError:
            logger.info("Token expired, user needs to login again")
            raise AuthError("Token expired - please login again")
        except jwt.ImmatureSignatureError:
            raise AuthError("Token not active yet")
        except jwt.InvalidTokenError as e:
            logger.info(f"Invalid JWT format or signature: {e}")
            raise AuthError("Invalid token format")

        user = self.users.find_by_id(decoded.get("userId", ""))
        if user is None:
            logger.info(f"Authentication failed: user not found for userId {decoded.get('userId')}")
            raise AuthError("User not found")
        return user


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return None


def login_required(view):
    """Require a valid bearer token; the user is stored on ``g.user``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        auth: AuthService = current_app.extensions["wanderai.auth"]
        try:
            g.user = auth.user_from_token(bearer_token())
        except AuthError as e:
            return jsonify({"success": False, "error": e.message}), e.status
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    """Require a bearer token belonging to an admin."""

    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if g.user.role != "admin":
            return jsonify({"success": False, "error": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


__all__ = ["AuthService", "AuthError", "login_required", "admin_required", "bearer_token"]
