"""Pricing — USD-оракул и учитываемые метрики DEX-индексатора.

Компоненты (от листьев к корню):
- AnchorPriceResolver: USD-цена quote-native-asset по якорным парам
- TokenPriceGraphSearch: цена токена в quote-native-asset через whitelist
- VolumeTracker / FeeTracker / LiquidityTracker: учитываемые USD-метрики
- PricingEngine: фасад для pipeline
"""

from .anchor_price import AnchorPriceResolver, AnchorQuote
from .config import (
    DEFAULT_ANCHOR_PAIRS,
    DEFAULT_MINIMUM_LIQUIDITY_THRESHOLD,
    DEFAULT_WHITELIST,
    WETH_ADDRESS,
    AnchorPair,
    AnchorPairSet,
    PricingConfig,
    QuoteSide,
    load_pricing_config,
)
from .engine import PricingEngine, TrackedAmounts
from .snapshot import ADDRESS_ZERO, EntityStore, InMemorySnapshot, PairRegistry
from .token_price import TokenPriceGraphSearch
from .tracking import FeeTracker, LiquidityTracker, SideValues, VolumeTracker

__all__ = [
    "AnchorPriceResolver",
    "AnchorQuote",
    "DEFAULT_ANCHOR_PAIRS",
    "DEFAULT_MINIMUM_LIQUIDITY_THRESHOLD",
    "DEFAULT_WHITELIST",
    "WETH_ADDRESS",
    "AnchorPair",
    "AnchorPairSet",
    "PricingConfig",
    "QuoteSide",
    "load_pricing_config",
    "PricingEngine",
    "TrackedAmounts",
    "ADDRESS_ZERO",
    "EntityStore",
    "InMemorySnapshot",
    "PairRegistry",
    "TokenPriceGraphSearch",
    "FeeTracker",
    "LiquidityTracker",
    "SideValues",
    "VolumeTracker",
]
