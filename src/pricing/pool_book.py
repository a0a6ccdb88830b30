from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from core.base_types import Address, Token
from core.errors import PoolNotFound
from core.tokens import sort_tokens

from .uniswap_v2_pair import UniswapV2Pair
from .v2_library import ReservePair

logger = logging.getLogger(__name__)


class PoolBook:
    """
    Latest reserve snapshots handed over by the chain reader.

    A missing entry means "not fetched yet"; an entry with zero reserves is a
    confirmed-empty pool. Callers must not conflate the two.
    """

    def __init__(self, pairs: Iterable[UniswapV2Pair] = ()):
        self._pairs: dict[tuple[str, str], UniswapV2Pair] = {}
        for pair in pairs:
            self.upsert(pair)

    @staticmethod
    def _key(token_a: Address, token_b: Address) -> tuple[str, str]:
        first, second = sort_tokens(token_a, token_b)
        return first.checksum, second.checksum

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self):
        return iter(self._pairs.values())

    def upsert(self, pair: UniswapV2Pair) -> None:
        key = self._key(pair.token0.address, pair.token1.address)
        previous = self._pairs.get(key)
        self._pairs[key] = pair
        if previous is None:
            logger.debug("Pool %s added: %s", pair.address.checksum, pair)
        else:
            logger.debug(
                "Pool %s reserves %s/%s -> %s/%s",
                pair.address.checksum,
                previous.reserve0,
                previous.reserve1,
                pair.reserve0,
                pair.reserve1,
            )

    def remove(self, token_a: Address, token_b: Address) -> None:
        self._pairs.pop(self._key(token_a, token_b), None)

    def get(self, token_a: Address, token_b: Address) -> Optional[UniswapV2Pair]:
        if token_a == token_b:
            return None
        return self._pairs.get(self._key(token_a, token_b))

    def require(self, token_a: Address, token_b: Address) -> UniswapV2Pair:
        pair = self.get(token_a, token_b)
        if pair is None:
            raise PoolNotFound(token_a, token_b)
        return pair

    def reserves_for_path(self, path: Sequence[Address]) -> Optional[list[ReservePair]]:
        """
        Reserves per hop oriented along ``path``, or None if any hop has no
        snapshot loaded.
        """
        reserves: list[ReservePair] = []
        for token_in, token_out in zip(path, path[1:]):
            pair = self.get(token_in, token_out)
            if pair is None:
                logger.debug("No snapshot for hop %s -> %s", token_in, token_out)
                return None
            reserves.append(pair.reserves_for(_pair_token(pair, token_in)))
        return reserves


def _pair_token(pair: UniswapV2Pair, address: Address) -> Token:
    return pair.token0 if pair.token0.address == address else pair.token1
