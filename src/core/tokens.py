from __future__ import annotations

from typing import Iterable, Optional

import config
from core.base_types import Address, Token
from core.errors import UnknownToken


class TokenList:
    """
    Ordered token registry for one network.

    The native coin never has a pool of its own; anything that looks up
    pools goes through ``routing_address`` so the wrapped-native contract
    stands in for it.
    """

    def __init__(self, tokens: Iterable[Token], wrapped_native: Address):
        self.tokens: list[Token] = list(tokens)
        self.wrapped_native = wrapped_native
        self._by_address: dict[str, Token] = {}
        self._by_symbol: dict[str, Token] = {}
        for token in self.tokens:
            self._by_address.setdefault(token.address.lower, token)
            self._by_symbol.setdefault(token.symbol.lower(), token)

    @classmethod
    def default(cls) -> "TokenList":
        tokens = [Token.from_dict(entry) for entry in config.TOKEN_LIST]
        return cls(tokens, Address.from_string(config.WRAPPED_NATIVE_ADDRESS))

    def __iter__(self):
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def by_address(self, address: Address | str) -> Optional[Token]:
        key = address.lower if isinstance(address, Address) else address.lower()
        return self._by_address.get(key)

    def by_symbol(self, symbol: str) -> Optional[Token]:
        return self._by_symbol.get(symbol.strip().lower())

    def require_symbol(self, symbol: str) -> Token:
        token = self.by_symbol(symbol)
        if token is None:
            raise UnknownToken(f"Unknown token symbol: {symbol}")
        return token

    def routing_address(self, token: Token) -> Address:
        if token.is_native:
            return self.wrapped_native
        return token.address

    def routing_token(self, token: Token) -> Token:
        """The token that actually sits in pools for ``token``."""
        if not token.is_native:
            return token
        wrapped = self.by_address(self.wrapped_native)
        if wrapped is not None:
            return wrapped
        return Token(
            address=self.wrapped_native,
            symbol=f"W{token.symbol}",
            decimals=token.decimals,
            name=f"Wrapped {token.name}".strip(),
        )


def sort_tokens(token_a: Address, token_b: Address) -> tuple[Address, Address]:
    """Pair ordering convention: token0 is the lower address."""
    if token_a == token_b:
        raise ValueError("identical addresses")
    if token_a < token_b:
        return token_a, token_b
    return token_b, token_a
