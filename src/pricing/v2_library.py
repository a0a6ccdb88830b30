"""
Constant-product AMM math, mirroring the on-chain UniswapV2Library.

All quoting math uses Python ints only so results match the router bit for
bit. Functions are total over non-negative ints: an empty pool, a zero
amount or a drain beyond the reserve yields 0, and a path/reserve shape
mismatch yields the input unchanged. Negative inputs are a caller error and
are not checked.
"""

from __future__ import annotations

import math
from decimal import ROUND_FLOOR, Decimal
from typing import NamedTuple, Sequence

FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000
MINIMUM_LIQUIDITY = 1000
BPS_BASE = 10_000


class ReservePair(NamedTuple):
    """Pool reserves oriented in trade direction."""

    reserve_in: int
    reserve_out: int

    def flipped(self) -> "ReservePair":
        return ReservePair(self.reserve_out, self.reserve_in)

    @property
    def is_empty(self) -> bool:
        return self.reserve_in <= 0 or self.reserve_out <= 0


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Equivalent amount of the other asset at the pool ratio (no fee)."""
    if amount_a <= 0:
        return 0
    if reserve_a <= 0 or reserve_b <= 0:
        return 0
    return amount_a * reserve_b // reserve_a


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> int:
    """
    Maximum output for an exact input.

    amount_in_with_fee = amount_in * 997
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * 1000 + amount_in_with_fee
    amount_out = numerator // denominator
    """
    if amount_in <= 0:
        return 0
    if reserve_in <= 0 or reserve_out <= 0:
        return 0

    amount_in_with_fee = amount_in * fee_numerator
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * fee_denominator + amount_in_with_fee
    return numerator // denominator


def get_amount_in(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> int:
    """
    Minimum input for an exact output (inverse of get_amount_out).

    The trailing +1 rounds up so the input always covers amount_out.
    """
    if amount_out <= 0:
        return 0
    if reserve_in <= 0 or reserve_out <= 0:
        return 0
    if amount_out >= reserve_out:
        return 0

    numerator = reserve_in * amount_out * fee_denominator
    denominator = (reserve_out - amount_out) * fee_numerator
    return numerator // denominator + 1


def get_amounts_out(
    amount_in: int, path: Sequence, reserves: Sequence[ReservePair]
) -> list[int]:
    """Return [amount_in, after_hop1, after_hop2, ...]."""
    if len(path) < 2 or len(reserves) != len(path) - 1:
        return [amount_in]

    amounts = [amount_in]
    for reserve_in, reserve_out in reserves:
        amounts.append(get_amount_out(amounts[-1], reserve_in, reserve_out))
    return amounts


def get_amounts_in(
    amount_out: int, path: Sequence, reserves: Sequence[ReservePair]
) -> list[int]:
    """Return required amounts per step, filled backwards from amount_out."""
    if len(path) < 2 or len(reserves) != len(path) - 1:
        return [amount_out]

    amounts = [0] * len(path)
    amounts[-1] = amount_out
    for i in range(len(path) - 1, 0, -1):
        reserve_in, reserve_out = reserves[i - 1]
        amounts[i - 1] = get_amount_in(amounts[i], reserve_in, reserve_out)
    return amounts


def calculate_price_impact(
    amount_in: int, amount_out: int, reserve_in: int, reserve_out: int
) -> float:
    """
    Price impact in percent: 1 - (amount_out / amount_in) / (reserve_out / reserve_in).

    The subtraction is exact; only the final ratio is a float.
    """
    if amount_in <= 0 or reserve_in <= 0 or reserve_out <= 0:
        return 0.0

    spot_numerator = reserve_out * amount_in
    execution_numerator = amount_out * reserve_in
    if spot_numerator <= 0:
        return 0.0

    impact = (spot_numerator - execution_numerator) / spot_numerator * 100
    return max(0.0, impact)


def slippage_to_bps(slippage_percent: float | Decimal | str) -> int:
    """Whole basis points, floored, clamped to [0, 10000]."""
    # str() first so 0.57 is 57 bps, not 56.99999...
    bps = (Decimal(str(slippage_percent)) * 100).to_integral_value(
        rounding=ROUND_FLOOR
    )
    return min(max(int(bps), 0), BPS_BASE)


def calculate_minimum_amount_out(
    amount_out: int, slippage_percent: float | Decimal | str
) -> int:
    slippage_bps = slippage_to_bps(slippage_percent)
    return amount_out * (BPS_BASE - slippage_bps) // BPS_BASE


def calculate_liquidity_minted(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
    minimum_liquidity: int = MINIMUM_LIQUIDITY,
) -> int:
    """
    LP tokens minted for a deposit.

    First deposit: isqrt(a * b) - MINIMUM_LIQUIDITY (the minimum is locked).
    Otherwise the lesser of the two proportional contributions.
    """
    if total_supply == 0:
        root = math.isqrt(amount_a * amount_b)
        return root - minimum_liquidity if root > minimum_liquidity else 0

    if reserve_a <= 0 or reserve_b <= 0:
        return 0
    liquidity_a = amount_a * total_supply // reserve_a
    liquidity_b = amount_b * total_supply // reserve_b
    return min(liquidity_a, liquidity_b)


def calculate_remove_liquidity_amounts(
    liquidity: int, reserve_a: int, reserve_b: int, total_supply: int
) -> tuple[int, int]:
    if total_supply == 0:
        return 0, 0
    amount_a = liquidity * reserve_a // total_supply
    amount_b = liquidity * reserve_b // total_supply
    return amount_a, amount_b
