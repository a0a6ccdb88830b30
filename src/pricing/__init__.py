from .pool_book import PoolBook
from .price_impact import (
    PriceImpactAnalyzer,
    PriceImpactResult,
    Severity,
    assess_price_impact,
    assess_route_impact,
)
from .pricing_engine import LiquidityQuote, PricingEngine, Quote
from .route import Route, RouteSelection, RouteSelector
from .uniswap_v2_pair import UniswapV2Pair
from .v2_library import ReservePair

__all__ = [
    "ReservePair",
    "UniswapV2Pair",
    "PoolBook",
    "Route",
    "RouteSelection",
    "RouteSelector",
    "Severity",
    "PriceImpactResult",
    "PriceImpactAnalyzer",
    "assess_price_impact",
    "assess_route_impact",
    "PricingEngine",
    "Quote",
    "LiquidityQuote",
]
