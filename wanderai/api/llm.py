"""Narrative enrichment via an OpenAI-compatible chat completions endpoint.

The text is advisory: a missing key, a timeout or a malformed reply all
produce an empty string and the itinerary is built without it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import openai
from openai import OpenAI

from wanderai.api.config import get_narrative_config

logger = logging.getLogger(__name__)

PACE_DESCRIPTIONS = {
    "easy": "relaxed with fewer activities",
    "medium": "moderate pace",
    "hard": "packed with maximum experiences",
}

# ---------------------------------------------------------------------------
# Prompt construction helpers
# ---------------------------------------------------------------------------

def build_prompt(city: str, budget: int, days: int, pace: str) -> str:
    style = PACE_DESCRIPTIONS.get(pace, "moderate pace")
    return f"""Please provide a detailed {days}-day travel itinerary for {city} with these specific requirements:

TRIP DETAILS:
- Destination: {city}
- Duration: {days} days
- Total Budget: ₹{budget:,} (Indian Rupees)
- Travel Style: {pace} ({style})

IMPORTANT: Please include REAL, SPECIFIC landmark names for {city}. Do not use generic names.

REQUIRED FORMAT:

**FAMOUS LANDMARKS & ATTRACTIONS:**
List 8-10 real, specific attractions in {city} with:
- Exact name of landmark/temple/fort/palace/museum
- Type (temple, palace, fort, museum, garden, market, etc.)
- Brief description
- Estimated entry cost in INR

**DINING RECOMMENDATIONS:**
List 5-6 real restaurants or food places in {city}:
- Restaurant name or area famous for food
- Cuisine type
- Price range

**DAILY SCHEDULE:**
Day 1: Morning: [specific landmark], Afternoon: [specific place], Evening: [specific activity]
Day 2: [continue pattern]
[Include {days} days total]

**PRACTICAL INFO:**
- Best time to visit {city}
- Local transportation
- Cultural tips
- Budget breakdown

Please use actual landmark names that exist in {city}. Be specific and authentic."""


def _extract_content(response: Any) -> str:
    """Pull the first choice's text out of a chat completion."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as exc:
        logger.error("Malformed chat completion response: %s", exc)
        return ""
    return (content or "").strip()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class NarrativeProvider:
    """Fetches free-text destination commentary; never raises."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, client: Optional[OpenAI] = None):
        self.config = config or get_narrative_config()
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None or bool(self.config.get("api_key"))

    @property
    def timeout(self) -> float:
        return float(self.config.get("timeout", 10))

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.config["api_key"],
                base_url=self.config["base_url"],
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def fetch_narrative(self, city: str, budget: int, days: int, pace: str) -> str:
        if not self.enabled:
            logger.debug("Narrative provider disabled - no API key")
            return ""

        messages = [{"role": "user", "content": build_prompt(city, budget, days, pace)}]
        logger.debug(
            "Calling chat completions: model=%s city=%s days=%d",
            self.config.get("model"),
            city,
            days,
        )

        try:
            response = self._get_client().chat.completions.create(
                model=self.config.get("model", "deepseek/deepseek-r1"),
                messages=messages,
                temperature=self.config.get("temperature", 0.7),
                max_tokens=self.config.get("max_tokens", 4000),
            )
        except openai.OpenAIError as exc:
            logger.warning("Narrative enrichment failed for %s: %s", city, exc)
            return ""

        content = _extract_content(response)
        if content:
            logger.info("Narrative provider returned %d characters for %s", len(content), city)
        return content

    def check_health(self) -> bool:
        if not self.enabled:
            logger.info("Narrative API not enabled - no API key provided")
            return False
        try:
            self._get_client().chat.completions.create(
                model=self.config.get("model", "deepseek/deepseek-r1"),
                messages=[{"role": "user", "content": "Hello, respond with just 'OK'."}],
                max_tokens=10,
            )
        except openai.OpenAIError as exc:
            logger.warning("Narrative API health check failed: %s", exc)
            return False
        return True


__all__ = ["NarrativeProvider", "build_prompt"]
