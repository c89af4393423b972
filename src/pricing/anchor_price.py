"""
AnchorPriceResolver — USD-цена quote-native-asset по якорным stablecoin-парам

Политика (от наиболее к наименее уверенной):
1. primary + secondary + tertiary загружены, сумма quote-резервов > 0:
   взвешенное среднее, вес = quote-резерв пары / сумма quote-резервов
2. primary + secondary загружены, сумма quote-резервов > 0:
   то же взвешенное среднее по двум парам
3. primary загружена: цена primary без взвешивания
4. иначе: 0

Нулевая сумма резервов не делится, а переводит расчёт на ветку ниже.

Для якоря с quote-native-asset на стороне token1:
  quote-резерв = reserve1, цена stablecoin = token0_price (stablecoin за 1 WETH)
Для якоря с quote-native-asset на стороне token0:
  quote-резерв = reserve0, цена stablecoin = token1_price
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Optional

from src.core.domain import Pair
from src.core.math.decimal_safeguards import DECIMAL_CONTEXT, ZERO_BD, is_zero, safe_div
from src.pricing.config import AnchorPair, PricingConfig, QuoteSide
from src.pricing.snapshot import EntityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnchorQuote:
    """Вклад одной загруженной якорной пары."""

    anchor: AnchorPair
    quote_reserve: Decimal  # резерв quote-native-asset в паре
    price: Decimal  # stablecoin за одну единицу quote-native-asset


def quote_anchor(anchor: AnchorPair, pair: Pair) -> AnchorQuote:
    """Извлечение quote-резерва и цены из пары с учётом стороны quote-asset."""
    if anchor.quote_side is QuoteSide.TOKEN1:
        return AnchorQuote(anchor=anchor, quote_reserve=pair.reserve1, price=pair.token0_price)
    return AnchorQuote(anchor=anchor, quote_reserve=pair.reserve0, price=pair.token1_price)


def weighted_price(quotes: tuple[AnchorQuote, ...]) -> Optional[Decimal]:
    """
    Взвешенная по quote-резервам цена.

    Args:
        quotes: Вклады якорных пар

    Returns:
        Σ(price × reserve / Σreserve), или None если Σreserve == 0
    """
    with localcontext(DECIMAL_CONTEXT):
        total = ZERO_BD
        for q in quotes:
            total += q.quote_reserve

        if is_zero(total):
            return None

        result = ZERO_BD
        for q in quotes:
            weight = safe_div(q.quote_reserve, total)
            result += q.price * weight
        return result


class AnchorPriceResolver:
    """AnchorPriceResolver — USD-цена quote-native-asset.

    Чистая функция над снапшотом: ничего не пишет, результат сохраняет
    вызывающий в Bundle.quote_usd_price.
    """

    def __init__(self, store: EntityStore, config: Optional[PricingConfig] = None):
        """Инициализация resolver.

        Args:
            store: хранилище сущностей (снапшот)
            config: конфигурация (опционально, используется default)
        """
        self.store = store
        self.config = config or PricingConfig()

    def _load(self, anchor: Optional[AnchorPair]) -> Optional[AnchorQuote]:
        if anchor is None:
            return None
        pair = self.store.get_pair(anchor.pair_id)
        if pair is None:
            return None
        return quote_anchor(anchor, pair)

    def compute_quote_usd_price(self) -> Decimal:
        """USD-цена одной единицы quote-native-asset.

        Returns:
            Цена в USD, или 0 если ни одна якорная пара не загружена
        """
        anchors = self.config.anchor_pairs
        primary = self._load(anchors.primary)
        secondary = self._load(anchors.secondary)
        tertiary = self._load(anchors.tertiary)

        # Порядок суммирования фиксирован: secondary, primary, tertiary

        # 1. Все три якоря
        if primary is not None and secondary is not None and tertiary is not None:
            price = weighted_price((secondary, primary, tertiary))
            if price is not None:
                logger.debug("quote USD price from three anchors: %s", price)
                return price
            logger.debug("three anchors have zero quote reserves, falling back")

        # 2. primary + secondary
        if primary is not None and secondary is not None:
            price = weighted_price((secondary, primary))
            if price is not None:
                logger.debug("quote USD price from two anchors: %s", price)
                return price
            logger.debug("two anchors have zero quote reserves, falling back")

        # 3. Только primary
        if primary is not None:
            logger.debug("quote USD price from single anchor %s: %s", primary.anchor.label, primary.price)
            return primary.price

        # 4. Якорей нет
        return ZERO_BD
