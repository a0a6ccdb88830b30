from .base_types import Address, Token, TokenAmount
from .errors import PoolNotFound, PricingError, QuoteError, UnknownToken
from .tokens import TokenList, sort_tokens
from .units import format_balance, format_units, parse_amount, parse_units

__all__ = [
    "Address",
    "Token",
    "TokenAmount",
    "TokenList",
    "sort_tokens",
    "PricingError",
    "UnknownToken",
    "PoolNotFound",
    "QuoteError",
    "format_units",
    "parse_units",
    "parse_amount",
    "format_balance",
]
