from __future__ import annotations

from decimal import Decimal

from core.base_types import Address, Token

from . import v2_library as lib
from .v2_library import ReservePair


class UniswapV2Pair:
    """
    Reserve snapshot of one Uniswap V2 style pool.
    All math uses integers only; Decimal/float appear only in display helpers.
    """

    def __init__(
        self,
        address: Address,
        token0: Token,
        token1: Token,
        reserve0: int,
        reserve1: int,
        total_supply: int = 0,
    ):
        if token0.address == token1.address:
            raise ValueError("token0 and token1 must be different")
        if not isinstance(reserve0, int) or not isinstance(reserve1, int):
            raise TypeError("reserves must be int")
        if reserve0 < 0 or reserve1 < 0:
            raise ValueError("reserves must be non-negative")
        if not isinstance(total_supply, int):
            raise TypeError("total_supply must be int")
        if total_supply < 0:
            raise ValueError("total_supply must be non-negative")

        self.address = address
        self.token0 = token0
        self.token1 = token1
        self.reserve0 = reserve0
        self.reserve1 = reserve1
        self.total_supply = total_supply

    def __repr__(self) -> str:
        return (
            f"UniswapV2Pair({self.token0.symbol}/{self.token1.symbol}, "
            f"reserve0={self.reserve0}, reserve1={self.reserve1})"
        )

    @property
    def has_liquidity(self) -> bool:
        return self.reserve0 > 0 and self.reserve1 > 0

    def contains(self, token: Token) -> bool:
        return token.address in (self.token0.address, self.token1.address)

    def other(self, token: Token) -> Token:
        if token.address == self.token0.address:
            return self.token1
        if token.address == self.token1.address:
            return self.token0
        raise ValueError("token not in pair")

    def reserves_for(self, token_in: Token) -> ReservePair:
        """Reserves oriented for a trade selling ``token_in``."""
        if token_in.address == self.token0.address:
            return ReservePair(self.reserve0, self.reserve1)
        if token_in.address == self.token1.address:
            return ReservePair(self.reserve1, self.reserve0)
        raise ValueError("token_in not in pair")

    def get_amount_out(self, amount_in: int, token_in: Token) -> int:
        reserve_in, reserve_out = self.reserves_for(token_in)
        return lib.get_amount_out(amount_in, reserve_in, reserve_out)

    def get_amount_in(self, amount_out: int, token_out: Token) -> int:
        reserve_in, reserve_out = self.reserves_for(self.other(token_out))
        return lib.get_amount_in(amount_out, reserve_in, reserve_out)

    def get_spot_price(self, token_in: Token) -> Decimal:
        """
        Human units of the other token per one ``token_in``, decimals applied.
        Display only.
        """
        reserve_in, reserve_out = self.reserves_for(token_in)
        if reserve_in == 0:
            return Decimal(0)
        token_out = self.other(token_in)
        scale = Decimal(10) ** (token_in.decimals - token_out.decimals)
        return Decimal(reserve_out) / Decimal(reserve_in) * scale

    def get_execution_price(self, amount_in: int, token_in: Token) -> Decimal:
        if amount_in <= 0:
            return Decimal(0)
        amount_out = self.get_amount_out(amount_in, token_in)
        token_out = self.other(token_in)
        scale = Decimal(10) ** (token_in.decimals - token_out.decimals)
        return Decimal(amount_out) / Decimal(amount_in) * scale

    def get_price_impact(self, amount_in: int, token_in: Token) -> float:
        """Percent, same figure the swap form shows."""
        reserve_in, reserve_out = self.reserves_for(token_in)
        amount_out = lib.get_amount_out(amount_in, reserve_in, reserve_out)
        return lib.calculate_price_impact(
            amount_in, amount_out, reserve_in, reserve_out
        )

    def simulate_swap(self, amount_in: int, token_in: Token) -> "UniswapV2Pair":
        """
        Returns a NEW pair with updated reserves after the swap.
        """
        amount_out = self.get_amount_out(amount_in, token_in)
        if amount_out == 0:
            raise ValueError("insufficient liquidity for this trade")

        if token_in.address == self.token0.address:
            new_reserve0 = self.reserve0 + amount_in
            new_reserve1 = self.reserve1 - amount_out
        else:
            new_reserve0 = self.reserve0 - amount_out
            new_reserve1 = self.reserve1 + amount_in

        return UniswapV2Pair(
            address=self.address,
            token0=self.token0,
            token1=self.token1,
            reserve0=new_reserve0,
            reserve1=new_reserve1,
            total_supply=self.total_supply,
        )

    def quote_deposit(self, amount: int, token: Token) -> int:
        """Amount of the other token that keeps the pool ratio."""
        reserve_a, reserve_b = self.reserves_for(token)
        return lib.quote(amount, reserve_a, reserve_b)

    def liquidity_minted(self, amount0: int, amount1: int) -> int:
        return lib.calculate_liquidity_minted(
            amount0, amount1, self.reserve0, self.reserve1, self.total_supply
        )

    def liquidity_burned(self, liquidity: int) -> tuple[int, int]:
        """(amount0, amount1) redeemed for ``liquidity`` LP tokens."""
        return lib.calculate_remove_liquidity_amounts(
            liquidity, self.reserve0, self.reserve1, self.total_supply
        )

    def pool_share(self, lp_balance: int) -> float:
        if self.total_supply <= 0:
            return 0.0
        return lp_balance / self.total_supply * 100
