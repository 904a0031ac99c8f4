# wanderai/api/config.py
"""Configuration management for the travel planner API."""
import os
from dotenv import load_dotenv

load_dotenv()


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        "base_url": os.getenv("GOOGLE_MAPS_BASE_URL", "https://maps.googleapis.com"),
        "timeout": get_external_timeout(),
    }


def get_google_maps_api_key():
    return os.getenv("GOOGLE_MAPS_API_KEY", "")


def get_narrative_config():
    """Get configuration for the chat-completion provider used for insights.

    The key is optional. Without it the provider stays disabled and
    itineraries are built without narrative text.
    """
    api_key = (
        os.getenv("NARRATIVE_API_KEY")
        or os.getenv("DEEPSEEK_API_KEY")
        or os.getenv("OPENAI_API_KEY")
        or ""
    )
    return {
        "api_key": api_key,
        "base_url": os.getenv("NARRATIVE_BASE_URL", "https://openrouter.ai/api/v1"),
        "model": os.getenv("NARRATIVE_MODEL", "deepseek/deepseek-r1"),
        "temperature": float(os.getenv("NARRATIVE_TEMPERATURE", "0.7")),
        "max_tokens": int(os.getenv("NARRATIVE_MAX_TOKENS", "4000")),
        "timeout": get_external_timeout(),
    }


def get_external_timeout():
    """Timeout in seconds applied to every outbound HTTP call."""
    return float(os.getenv("EXTERNAL_API_TIMEOUT", "10"))


def get_jwt_config():
    """Get JWT signing configuration."""
    return {
        "secret": os.getenv("JWT_SECRET", "your-secret-key-change-in-production"),
        "algorithm": "HS256",
        "expires_days": int(os.getenv("JWT_EXPIRES_DAYS", "7")),
    }


def get_currency_config():
    """Get the canonical ledger currency and rate overrides."""
    return {
        "canonical": "INR",
        "usd_rate": float(os.getenv("USD_TO_INR_RATE", "83.25")),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 3000))


def get_app_env():
    return os.getenv("APP_ENV", os.getenv("FLASK_ENV", "production")).lower()


def is_development():
    return get_app_env() == "development"


def should_seed_demo_users():
    return os.getenv("SEED_DEMO_USERS", "true").lower() in ("1", "true", "yes")
