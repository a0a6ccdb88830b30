from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

import config
from core.base_types import Address, Token
from core.tokens import TokenList
from core.units import format_units

from .pool_book import PoolBook
from .v2_library import get_amounts_out

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """A priced swap path: token_in -> [bridge ->] token_out."""

    path: tuple[Address, ...]
    path_symbols: tuple[str, ...]
    amounts: tuple[int, ...]
    amount_out_formatted: str

    def __post_init__(self) -> None:
        validate_path(self.path)
        if len(self.amounts) != len(self.path):
            raise ValueError("amounts must have one entry per path token")

    @property
    def amount_in(self) -> int:
        return self.amounts[0]

    @property
    def amount_out(self) -> int:
        return self.amounts[-1]

    @property
    def num_hops(self) -> int:
        return len(self.path) - 1

    @property
    def is_multi_hop(self) -> bool:
        return self.num_hops > 1

    def to_dict(self) -> dict:
        return {
            "path": [address.checksum for address in self.path],
            "path_symbols": list(self.path_symbols),
            "is_multi_hop": self.is_multi_hop,
            "amount_out": self.amount_out,
            "amount_out_formatted": self.amount_out_formatted,
        }


@dataclass(frozen=True)
class RouteSelection:
    best: Optional[Route] = None
    routes: list[Route] = field(default_factory=list)  # amount_out descending

    @property
    def available(self) -> bool:
        return self.best is not None


def validate_path(path: Sequence[Address]) -> None:
    if len(path) < 2:
        raise ValueError("path needs at least two tokens")
    for left, right in zip(path, path[1:]):
        if left == right:
            raise ValueError("path has identical adjacent tokens")


class RouteSelector:
    """
    Compares the direct pool against a single bridge hop.

    Only one intermediate token is ever tried, picked from a fixed preference
    order: wrapped native first, then ``bridge_preference``.
    """

    def __init__(
        self,
        tokens: TokenList,
        bridge_preference: Sequence[str] = config.BRIDGE_FALLBACK_SYMBOLS,
    ):
        self.tokens = tokens
        self.bridge_preference = tuple(bridge_preference)

    def pick_bridge(self, token_in: Token, token_out: Token) -> Optional[Token]:
        endpoints = (
            self.tokens.routing_address(token_in),
            self.tokens.routing_address(token_out),
        )
        wrapped = self.tokens.by_address(self.tokens.wrapped_native)
        if wrapped is not None and wrapped.address not in endpoints:
            return wrapped

        for symbol in self.bridge_preference:
            candidate = self.tokens.by_symbol(symbol)
            if candidate is None:
                continue
            if self.tokens.routing_address(candidate) in endpoints:
                continue
            return candidate
        return None

    def candidate_paths(
        self, token_in: Token, token_out: Token
    ) -> list[tuple[list[Token], bool]]:
        """[(tokens along path, is_multi_hop)], direct first."""
        direct = [token_in, token_out]
        candidates = [(direct, False)]
        bridge = self.pick_bridge(token_in, token_out)
        if bridge is not None:
            candidates.append(([token_in, bridge, token_out], True))
        return candidates

    def evaluate(
        self, path_tokens: Sequence[Token], amount_in: int, book: PoolBook
    ) -> Optional[Route]:
        """
        Price one path against the book. None when a hop has no snapshot or
        the chained output is not positive.
        """
        path = tuple(self.tokens.routing_address(token) for token in path_tokens)
        validate_path(path)
        reserves = book.reserves_for_path(path)
        if reserves is None:
            return None

        amounts = get_amounts_out(amount_in, path, reserves)
        if len(amounts) != len(path) or amounts[-1] <= 0:
            return None

        token_out = path_tokens[-1]
        return Route(
            path=path,
            path_symbols=tuple(token.symbol for token in path_tokens),
            amounts=tuple(amounts),
            amount_out_formatted=format_units(amounts[-1], token_out.decimals),
        )

    def select(
        self, amount_in: int, token_in: Token, token_out: Token, book: PoolBook
    ) -> RouteSelection:
        if amount_in <= 0:
            return RouteSelection()

        direct: Optional[Route] = None
        multi_hop: Optional[Route] = None
        for path_tokens, is_multi_hop in self.candidate_paths(token_in, token_out):
            route = self.evaluate(path_tokens, amount_in, book)
            logger.debug(
                "Route %s -> %s",
                "/".join(token.symbol for token in path_tokens),
                route.amount_out if route else None,
            )
            if is_multi_hop:
                multi_hop = route
            else:
                direct = route

        direct_out = direct.amount_out if direct else 0
        if multi_hop is not None and multi_hop.amount_out > direct_out:
            best: Optional[Route] = multi_hop
        else:
            best = direct

        routes = [route for route in (direct, multi_hop) if route is not None]
        routes.sort(key=lambda route: route.amount_out, reverse=True)

        if best is not None:
            logger.debug(
                "Best route %s: %s %s",
                "/".join(best.path_symbols),
                best.amount_out_formatted,
                token_out.symbol,
            )
        return RouteSelection(best=best, routes=routes)
