"""
Tracked metrics — учитываемые USD-объём, комиссия и ликвидность

Только токены из whitelist вносят вклад в протокольные USD-метрики.

Предусловия (любое нарушено → 0):
- bundle загружен и quote_usd_price известна
- quote_price обоих токенов известна

value_i = amount_i × (token_i.quote_price × bundle.quote_usd_price)

| whitelist       | volume                | fee               | liquidity         |
|-----------------|-----------------------|-------------------|-------------------|
| оба             | (value0 + value1) / 2 | |value0 - value1| | value0 + value1   |
| только token0   | value0                | 0                 | 2 × value0        |
| только token1   | value1                | 0                 | 2 × value1        |
| ни одного       | 0                     | 0                 | 0                 |
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Optional

from src.core.domain import BUNDLE_ID, Pair, Token
from src.core.math.decimal_safeguards import (
    DECIMAL_CONTEXT,
    TWO_BD,
    ZERO_BD,
    DecimalLike,
    safe_div,
    to_decimal,
)
from src.pricing.config import PricingConfig
from src.pricing.snapshot import EntityStore

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class SideValues:
    """USD-стоимость обеих сторон сделки и их принадлежность whitelist."""

    value0: Decimal
    value1: Decimal
    whitelisted0: bool
    whitelisted1: bool

    @property
    def both_whitelisted(self) -> bool:
        return self.whitelisted0 and self.whitelisted1


# =============================================================================
# BASE
# =============================================================================


class WhitelistTracker:
    """Общая часть трекеров: предусловия и оценка сторон в USD."""

    def __init__(self, store: EntityStore, config: Optional[PricingConfig] = None):
        """Инициализация трекера.

        Args:
            store: хранилище сущностей (снапшот, источник bundle)
            config: конфигурация (опционально, используется default)
        """
        self.store = store
        self.config = config or PricingConfig()

    def side_values(
        self,
        amount0: DecimalLike,
        token0: Optional[Token],
        amount1: DecimalLike,
        token1: Optional[Token],
    ) -> Optional[SideValues]:
        """Оценка сторон сделки в USD.

        Returns:
            SideValues, или None если какая-либо цена неизвестна
        """
        bundle = self.store.get_bundle(BUNDLE_ID)
        if bundle is None or bundle.quote_usd_price is None:
            return None
        if token0 is None or not token0.has_quote_price:
            return None
        if token1 is None or not token1.has_quote_price:
            return None

        amount0 = to_decimal(amount0)
        amount1 = to_decimal(amount1)

        with localcontext(DECIMAL_CONTEXT):
            price0 = token0.quote_price * bundle.quote_usd_price
            price1 = token1.quote_price * bundle.quote_usd_price
            return SideValues(
                value0=amount0 * price0,
                value1=amount1 * price1,
                whitelisted0=self.config.is_whitelisted(token0.id),
                whitelisted1=self.config.is_whitelisted(token1.id),
            )


# =============================================================================
# TRACKERS
# =============================================================================


class VolumeTracker(WhitelistTracker):
    """Учитываемый USD-объём свопа."""

    def get_tracked_volume_usd(
        self,
        amount0: DecimalLike,
        token0: Optional[Token],
        amount1: DecimalLike,
        token1: Optional[Token],
        pair: Optional[Pair] = None,
    ) -> Decimal:
        """USD-объём, засчитываемый в протокольные метрики.

        Если в whitelist один токен — берётся полная стоимость его стороны,
        если оба — среднее двух сторон, если ни одного — 0.

        Args:
            amount0: количество token0
            token0: token0 пары
            amount1: количество token1
            token1: token1 пары
            pair: пара свопа (только для диагностики)

        Returns:
            Учитываемый объём в USD
        """
        values = self.side_values(amount0, token0, amount1, token1)
        if values is None:
            logger.debug("tracked volume unavailable for pair %s", pair.id if pair else None)
            return ZERO_BD

        with localcontext(DECIMAL_CONTEXT):
            if values.both_whitelisted:
                return safe_div(values.value0 + values.value1, TWO_BD)
            if values.whitelisted0:
                return values.value0
            if values.whitelisted1:
                return values.value1
        return ZERO_BD


class FeeTracker(WhitelistTracker):
    """Учитываемый USD-объём комиссии."""

    def get_tracked_fee_volume_usd(
        self,
        amount0: DecimalLike,
        token0: Optional[Token],
        amount1: DecimalLike,
        token1: Optional[Token],
    ) -> Decimal:
        """Абсолютная разница стоимостей сторон, только если оба в whitelist."""
        values = self.side_values(amount0, token0, amount1, token1)
        if values is None or not values.both_whitelisted:
            return ZERO_BD

        with localcontext(DECIMAL_CONTEXT):
            if values.value0 >= values.value1:
                return values.value0 - values.value1
            return values.value1 - values.value0


class LiquidityTracker(WhitelistTracker):
    """Учитываемая USD-ликвидность."""

    def get_tracked_liquidity_usd(
        self,
        amount0: DecimalLike,
        token0: Optional[Token],
        amount1: DecimalLike,
        token1: Optional[Token],
    ) -> Decimal:
        """USD-ликвидность пула.

        Один токен в whitelist — удвоенная стоимость его стороны,
        оба — сумма сторон, ни одного — 0.
        """
        values = self.side_values(amount0, token0, amount1, token1)
        if values is None:
            return ZERO_BD

        with localcontext(DECIMAL_CONTEXT):
            if values.both_whitelisted:
                return values.value0 + values.value1
            if values.whitelisted0:
                return values.value0 * TWO_BD
            if values.whitelisted1:
                return values.value1 * TWO_BD
        return ZERO_BD
