from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

import config
from core.base_types import Token
from core.errors import QuoteError
from core.tokens import TokenList
from core.units import format_units

from . import v2_library as lib
from .pool_book import PoolBook
from .price_impact import PriceImpactResult, assess_route_impact
from .route import Route, RouteSelector
from .uniswap_v2_pair import UniswapV2Pair

logger = logging.getLogger(__name__)


@dataclass
class Quote:
    route: Route
    amount_in: int
    expected_output: int
    minimum_output: int
    price_impact: PriceImpactResult
    slippage_percent: Decimal
    alternatives: list[Route] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)

    @property
    def deadline(self) -> int:
        """Unix timestamp to pass to the router."""
        return int(self.timestamp) + config.DEADLINE_MINUTES * 60


@dataclass
class LiquidityQuote:
    amount_a: int
    amount_b: int
    liquidity: int
    pool_share_pct: float
    amount_a_min: int
    amount_b_min: int


class PricingEngine:
    """
    Main interface for the pricing module.
    Turns pool snapshots into swap and liquidity quotes; performs no I/O.
    """

    def __init__(
        self,
        book: PoolBook,
        tokens: Optional[TokenList] = None,
        selector: Optional[RouteSelector] = None,
        slippage_percent: Decimal | str | float = config.SLIPPAGE_PERCENT,
        liquidity_slippage_percent: Decimal | str | float = (
            config.LIQUIDITY_SLIPPAGE_PERCENT
        ),
    ):
        self.book = book
        self.tokens = tokens or TokenList.default()
        self.selector = selector or RouteSelector(self.tokens)
        self.slippage_percent = Decimal(str(slippage_percent))
        self.liquidity_slippage_percent = Decimal(str(liquidity_slippage_percent))

    def get_quote(self, token_in: Token, token_out: Token, amount_in: int) -> Quote:
        """
        Get best quote for an exact-input swap.
        """
        if amount_in <= 0:
            raise QuoteError("Enter an amount")

        selection = self.selector.select(amount_in, token_in, token_out, self.book)
        route = selection.best
        if route is None:
            logger.info(
                "No route for %s -> %s (amount_in=%s)",
                token_in.symbol,
                token_out.symbol,
                amount_in,
            )
            raise QuoteError("Insufficient liquidity for this trade")

        reserves = self.book.reserves_for_path(route.path)
        return Quote(
            route=route,
            amount_in=amount_in,
            expected_output=route.amount_out,
            minimum_output=lib.calculate_minimum_amount_out(
                route.amount_out, self.slippage_percent
            ),
            price_impact=assess_route_impact(route.amounts, reserves),
            slippage_percent=self.slippage_percent,
            alternatives=[r for r in selection.routes if r is not route],
        )

    def quote_exact_output(
        self, token_in: Token, token_out: Token, amount_out: int
    ) -> list[int]:
        """Amounts along the direct pool needed to receive ``amount_out``."""
        path = [
            self.tokens.routing_address(token_in),
            self.tokens.routing_address(token_out),
        ]
        reserves = self.book.reserves_for_path(path)
        if reserves is None:
            raise QuoteError("Pool not loaded")
        amounts = lib.get_amounts_in(amount_out, path, reserves)
        if amounts[0] <= 0:
            raise QuoteError("Insufficient liquidity for this trade")
        return amounts

    def quote_add_liquidity(
        self, token_a: Token, token_b: Token, amount_a: int
    ) -> LiquidityQuote:
        """
        Pair ``amount_a`` with token B at the pool ratio. A new (or empty)
        pool has no ratio, so the caller must price both sides itself.
        """
        pair = self.book.require(
            self.tokens.routing_address(token_a), self.tokens.routing_address(token_b)
        )
        side_a = self.tokens.routing_token(token_a)
        if not pair.has_liquidity:
            raise QuoteError("Pool is empty; both amounts are required")

        amount_b = pair.quote_deposit(amount_a, side_a)
        return self._liquidity_quote(pair, side_a, amount_a, amount_b)

    def quote_add_liquidity_exact(
        self, token_a: Token, token_b: Token, amount_a: int, amount_b: int
    ) -> LiquidityQuote:
        pair = self.book.require(
            self.tokens.routing_address(token_a), self.tokens.routing_address(token_b)
        )
        side_a = self.tokens.routing_token(token_a)
        return self._liquidity_quote(pair, side_a, amount_a, amount_b)

    def _liquidity_quote(
        self, pair: UniswapV2Pair, side_a: Token, amount_a: int, amount_b: int
    ) -> LiquidityQuote:
        if side_a.address == pair.token0.address:
            amount0, amount1 = amount_a, amount_b
        else:
            amount0, amount1 = amount_b, amount_a
        liquidity = pair.liquidity_minted(amount0, amount1)
        supply_after = pair.total_supply + liquidity
        if pair.total_supply == 0:
            supply_after += lib.MINIMUM_LIQUIDITY
        share = liquidity / supply_after * 100 if supply_after > 0 else 0.0

        slippage = self.liquidity_slippage_percent
        return LiquidityQuote(
            amount_a=amount_a,
            amount_b=amount_b,
            liquidity=liquidity,
            pool_share_pct=share,
            amount_a_min=lib.calculate_minimum_amount_out(amount_a, slippage),
            amount_b_min=lib.calculate_minimum_amount_out(amount_b, slippage),
        )

    def quote_remove_liquidity(
        self, token_a: Token, token_b: Token, liquidity: int
    ) -> LiquidityQuote:
        pair = self.book.require(
            self.tokens.routing_address(token_a), self.tokens.routing_address(token_b)
        )
        amount0, amount1 = pair.liquidity_burned(liquidity)
        side_a = self.tokens.routing_token(token_a)
        if side_a.address == pair.token0.address:
            amount_a, amount_b = amount0, amount1
        else:
            amount_a, amount_b = amount1, amount0

        slippage = self.liquidity_slippage_percent
        return LiquidityQuote(
            amount_a=amount_a,
            amount_b=amount_b,
            liquidity=liquidity,
            pool_share_pct=pair.pool_share(liquidity),
            amount_a_min=lib.calculate_minimum_amount_out(amount_a, slippage),
            amount_b_min=lib.calculate_minimum_amount_out(amount_b, slippage),
        )

    def token_price(
        self, token: Token, reference: Optional[Token] = None
    ) -> Optional[Decimal]:
        """
        Price of one whole ``token`` in ``reference`` (USDC by default),
        routed directly from wrapped native or through it otherwise.
        """
        reference = reference or self.tokens.require_symbol(config.USD_REFERENCE_SYMBOL)
        token_address = self.tokens.routing_address(token)
        reference_address = self.tokens.routing_address(reference)
        if token_address == reference_address:
            return Decimal(1)

        wrapped = self.tokens.wrapped_native
        if wrapped in (token_address, reference_address):
            path = [token_address, reference_address]
        else:
            path = [token_address, wrapped, reference_address]

        reserves = self.book.reserves_for_path(path)
        if reserves is None:
            return None
        amounts = lib.get_amounts_out(10**token.decimals, path, reserves)
        return Decimal(format_units(amounts[-1], reference.decimals))
