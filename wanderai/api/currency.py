# wanderai/api/currency.py
"""Conversion between traveler-facing currencies and the INR ledger currency."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from wanderai.api.config import get_currency_config

logger = logging.getLogger(__name__)

# 1 unit of X = rate INR
DEFAULT_RATES: Dict[str, float] = {
    "USD": 83.25,
    "EUR": 90.50,
    "GBP": 105.75,
    "INR": 1.0,
    "JPY": 0.56,
    "AUD": 54.20,
    "CAD": 61.35,
}

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "C$",
}

# Per-day ranges in INR
BUDGET_RANGES = {
    "budget": (2000, 4000),
    "midrange": (4000, 8000),
    "luxury": (8000, 20000),
}


class CurrencyNormalizer:
    """Converts amounts to and from the canonical currency using a fixed table."""

    def __init__(self, rates: Optional[Dict[str, float]] = None, canonical: str = "INR"):
        self.canonical = canonical
        self.rates = dict(rates if rates is not None else DEFAULT_RATES)
        self.rates[canonical] = 1.0

    @classmethod
    def from_config(cls) -> "CurrencyNormalizer":
        cfg = get_currency_config()
        rates = dict(DEFAULT_RATES)
        rates["USD"] = cfg["usd_rate"]
        return cls(rates, canonical=cfg["canonical"])

    def rate_for(self, currency: str) -> float:
        code = (currency or "").upper()
        if code not in self.rates:
            raise ValueError(f"Unsupported currency: {currency}")
        return self.rates[code]

    def to_canonical(self, amount: float, from_currency: str) -> int:
        """Convert ``amount`` into canonical units, rounded to a whole unit."""
        rate = Decimal(str(self.rate_for(from_currency)))
        value = Decimal(str(amount)) * rate
        return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def from_canonical(self, amount: float, to_currency: str) -> float:
        """Convert canonical ``amount`` into ``to_currency``, rounded to cents."""
        rate = Decimal(str(self.rate_for(to_currency)))
        value = Decimal(str(amount)) / rate
        return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

    def format_amount(self, amount: float, currency: Optional[str] = None) -> str:
        code = (currency or self.canonical).upper()
        symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
        if code in ("INR", "JPY"):
            return f"{symbol}{amount:,.0f}"
        return f"{symbol}{amount:,.2f}"

    @staticmethod
    def recommended_budget_range(days: int) -> Dict[str, Dict[str, int]]:
        """Suggested total trip budget per tier, in canonical units."""
        return {
            tier: {"min": low * days, "max": high * days}
            for tier, (low, high) in BUDGET_RANGES.items()
        }


__all__ = ["CurrencyNormalizer", "DEFAULT_RATES", "CURRENCY_SYMBOLS"]
