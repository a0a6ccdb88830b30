"""Exceptions raised by the pricing core's object layer."""

from __future__ import annotations


class PricingError(Exception):
    """Base class for pricing errors."""


class UnknownToken(PricingError):
    """Token is not in the registry."""


class PoolNotFound(PricingError):
    """No reserve snapshot is loaded for the requested pair."""

    def __init__(self, token_a: object, token_b: object):
        self.token_a = token_a
        self.token_b = token_b
        super().__init__(f"No pool snapshot for {token_a}/{token_b}")


class QuoteError(PricingError):
    """Raised when a quote cannot be produced."""
