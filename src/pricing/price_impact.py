from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from . import v2_library as lib
from .v2_library import ReservePair

CRITICAL_IMPACT_PCT = 15.0
HIGH_IMPACT_PCT = 5.0
MEDIUM_IMPACT_PCT = 3.0
LOW_IMPACT_PCT = 1.0


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class PriceImpactResult:
    price_impact: float  # percent
    severity: Severity = Severity.LOW
    warning: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "price_impact": self.price_impact,
            "severity": self.severity.value,
            "warning": self.warning,
        }


NO_IMPACT = PriceImpactResult(price_impact=0.0)


def classify_price_impact(price_impact: float) -> PriceImpactResult:
    if price_impact >= CRITICAL_IMPACT_PCT:
        severity = Severity.CRITICAL
        warning = (
            "Extremely high price impact! "
            "You may lose a significant portion of your funds."
        )
    elif price_impact >= HIGH_IMPACT_PCT:
        severity = Severity.HIGH
        warning = "High price impact. Consider reducing the swap amount."
    elif price_impact >= MEDIUM_IMPACT_PCT:
        severity = Severity.MEDIUM
        warning = "Moderate price impact. Your trade will move the market price."
    elif price_impact >= LOW_IMPACT_PCT:
        severity = Severity.LOW
        warning = "Low price impact detected."
    else:
        severity = Severity.LOW
        warning = None
    return PriceImpactResult(
        price_impact=max(0.0, price_impact), severity=severity, warning=warning
    )


def assess_price_impact(
    amount_in: int, reserves: Optional[ReservePair]
) -> PriceImpactResult:
    """
    Impact of selling ``amount_in`` into a pool. Missing reserves, an empty
    pool or a zero amount all read as no impact.
    """
    if reserves is None or amount_in <= 0 or reserves.is_empty:
        return NO_IMPACT
    amount_out = lib.get_amount_out(amount_in, *reserves)
    impact = lib.calculate_price_impact(amount_in, amount_out, *reserves)
    return classify_price_impact(impact)


def assess_route_impact(
    amounts: Sequence[int], reserves: Optional[Sequence[ReservePair]]
) -> PriceImpactResult:
    """
    Impact of a whole path: realized output against the product of the
    per-hop spot prices. Reduces to assess_price_impact for one hop.
    """
    if not reserves or len(amounts) != len(reserves) + 1 or amounts[0] <= 0:
        return NO_IMPACT
    if any(pair.is_empty for pair in reserves):
        return NO_IMPACT
    reserve_in = math.prod(pair.reserve_in for pair in reserves)
    reserve_out = math.prod(pair.reserve_out for pair in reserves)
    impact = lib.calculate_price_impact(
        amounts[0], amounts[-1], reserve_in, reserve_out
    )
    return classify_price_impact(impact)


class PriceImpactAnalyzer:
    """
    Analyzes price impact across different trade sizes.
    """

    def __init__(self, reserves: ReservePair):
        self.reserves = reserves

    def generate_impact_table(self, sizes: list[int]) -> list[dict]:
        """
        Returns list of:
        {
            'amount_in': int,
            'amount_out': int,
            'price_impact_pct': float,
            'severity': Severity,
        }
        """
        rows: list[dict] = []
        for amount_in in sizes:
            amount_out = lib.get_amount_out(amount_in, *self.reserves)
            result = assess_price_impact(amount_in, self.reserves)
            rows.append(
                {
                    "amount_in": amount_in,
                    "amount_out": amount_out,
                    "price_impact_pct": result.price_impact,
                    "severity": result.severity,
                }
            )
        return rows

    def find_max_size_for_impact(self, max_impact_pct: float) -> int:
        """
        Binary search to find largest trade with impact <= max_impact_pct.
        """
        reserve_in = self.reserves.reserve_in
        if self.reserves.is_empty:
            return 0

        low = 1
        high = reserve_in
        best = 0

        while low <= high:
            mid = (low + high) // 2
            impact = assess_price_impact(mid, self.reserves).price_impact
            if impact <= max_impact_pct:
                best = mid
                low = mid + 1
            else:
                high = mid - 1

        return best
