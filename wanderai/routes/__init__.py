# wanderai/routes/__init__.py
from wanderai.routes.auth import create_auth_blueprint
from wanderai.routes.travel import create_travel_blueprint

__all__ = ["create_auth_blueprint", "create_travel_blueprint"]
