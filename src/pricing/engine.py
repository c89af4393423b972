"""
PricingEngine — фасад ценового ядра для pipeline индексатора

Порядок вызовов на одно событие:
1. refresh_token() для каждого токена, чья цена могла измениться
2. pipeline сохраняет новые токены (в снапшот/хранилище)
3. refresh_bundle() — новая USD-цена quote-native-asset
4. evaluate_swap() — учитываемые метрики события

Фасад ничего не пишет: все "обновления" возвращаются новыми экземплярами.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from src.core.domain import BUNDLE_ID, Bundle, Pair, Token
from src.core.math.decimal_safeguards import DecimalLike
from src.pricing.anchor_price import AnchorPriceResolver
from src.pricing.config import PricingConfig
from src.pricing.snapshot import EntityStore, PairRegistry
from src.pricing.token_price import TokenPriceGraphSearch
from src.pricing.tracking import FeeTracker, LiquidityTracker, VolumeTracker


@dataclass(frozen=True)
class TrackedAmounts:
    """Учитываемые USD-метрики одного события."""

    volume_usd: Decimal
    fee_volume_usd: Decimal
    liquidity_usd: Decimal


class PricingEngine:
    """Композиция компонентов ядра над одним снапшотом и конфигурацией."""

    def __init__(
        self,
        store: EntityStore,
        registry: PairRegistry,
        config: Optional[PricingConfig] = None,
    ):
        self.store = store
        self.config = config or PricingConfig()

        self.anchor_resolver = AnchorPriceResolver(store, self.config)
        self.token_search = TokenPriceGraphSearch(store, registry, self.config)
        self.volume_tracker = VolumeTracker(store, self.config)
        self.fee_tracker = FeeTracker(store, self.config)
        self.liquidity_tracker = LiquidityTracker(store, self.config)

    def refresh_token(self, token: Token) -> Token:
        """Копия токена с пересчитанной quote_price."""
        return token.with_quote_price(self.token_search.compute_quote_price(token))

    def refresh_bundle(self) -> Bundle:
        """Bundle (существующий или новый) с пересчитанной quote_usd_price."""
        bundle = self.store.get_bundle(BUNDLE_ID) or Bundle(id=BUNDLE_ID)
        return bundle.with_quote_usd_price(self.anchor_resolver.compute_quote_usd_price())

    def evaluate_swap(
        self,
        amount0: DecimalLike,
        token0: Optional[Token],
        amount1: DecimalLike,
        token1: Optional[Token],
        pair: Optional[Pair] = None,
    ) -> TrackedAmounts:
        """Все три учитываемые метрики события.

        Args:
            amount0: количество token0
            token0: token0 пары
            amount1: количество token1
            token1: token1 пары
            pair: пара события (для диагностики)

        Returns:
            TrackedAmounts
        """
        return TrackedAmounts(
            volume_usd=self.volume_tracker.get_tracked_volume_usd(
                amount0, token0, amount1, token1, pair
            ),
            fee_volume_usd=self.fee_tracker.get_tracked_fee_volume_usd(
                amount0, token0, amount1, token1
            ),
            liquidity_usd=self.liquidity_tracker.get_tracked_liquidity_usd(
                amount0, token0, amount1, token1
            ),
        )
