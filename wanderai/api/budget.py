# wanderai/api/budget.py
"""Budget allocation and activity cost estimation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

PACE_ACTIVITY_FRACTION = {
    "easy": 0.70,
    "medium": 0.85,
    "hard": 1.00,
}

# Canonical-currency cost by price level 0..4
DEFAULT_PRICE_TABLE: Dict[str, List[int]] = {
    "attraction": [0, 50, 200, 500, 1000],
    "dining": [0, 300, 800, 1500, 3000],
    "activity": [0, 100, 400, 800, 1500],
}


@dataclass(frozen=True)
class Allocation:
    per_day: int
    activity_fraction: float
    lodging_per_day: float
    activity_envelope: int  # spend allowed on activities and dining per day


class BudgetAllocator:
    """Splits a trip budget into a per-day spend envelope."""

    def __init__(self, price_table: Optional[Dict[str, List[int]]] = None):
        self.price_table = price_table or DEFAULT_PRICE_TABLE

    def allocate(
        self,
        total_budget: int,
        total_days: int,
        pace: str,
        nightly_rate: int = 0,
        nights: int = 0,
    ) -> Allocation:
        """Budget lodging first, then apply the pace fraction to the rest.

        A budget too small to cover lodging is not an error: the activity
        envelope is clamped to zero.
        """
        if total_days < 1:
            raise ValueError("total_days must be at least 1")
        if pace not in PACE_ACTIVITY_FRACTION:
            raise ValueError(f"Unknown pace: {pace}")

        per_day = int(total_budget // total_days)
        fraction = PACE_ACTIVITY_FRACTION[pace]
        lodging_per_day = (nightly_rate * nights) / total_days
        envelope = max(0.0, (per_day - lodging_per_day) * fraction)

        return Allocation(
            per_day=per_day,
            activity_fraction=fraction,
            lodging_per_day=lodging_per_day,
            activity_envelope=int(envelope),
        )

    def estimate_cost(self, category: str, price_level: int) -> int:
        if category == "lodging":
            raise ValueError("Lodging cost comes from the selected hotel")
        costs = self.price_table.get(category) or self.price_table["attraction"]
        index = min(max(int(price_level or 0), 0), len(costs) - 1)
        return costs[index]


__all__ = ["Allocation", "BudgetAllocator", "PACE_ACTIVITY_FRACTION", "DEFAULT_PRICE_TABLE"]
