"""
TokenPriceGraphSearch — цена токена в quote-native-asset

Одношаговый поиск по whitelist:
1. Токен сам является quote-native-asset → 1
2. Обход whitelist в фиксированном порядке; для каждого W:
   - пары token/W нет в реестре (ADDRESS_ZERO) → следующий W
   - пара не загружена или не содержит токен → следующий W
   - reserve_quote пары <= minimum_liquidity_threshold → следующий W
   - первая подходящая пара: цена = спот токена к второй стороне ×
     quote_price второй стороны; если цена второй стороны неизвестна → 0
3. Whitelist исчерпан → 0

Поиск НЕ рекурсивный и останавливается на ПЕРВОЙ подходящей паре, а не на
самой ликвидной: порядок whitelist — список приоритетов.
"""

import logging
from decimal import Decimal, localcontext
from typing import Optional

from src.core.domain import Token
from src.core.math.decimal_safeguards import DECIMAL_CONTEXT, ONE_BD, ZERO_BD
from src.pricing.config import PricingConfig
from src.pricing.snapshot import ADDRESS_ZERO, EntityStore, PairRegistry

logger = logging.getLogger(__name__)


class TokenPriceGraphSearch:
    """TokenPriceGraphSearch — производная цена токена через whitelist.

    Порядок проверок для каждого whitelist-токена W:
    1. Реестр пар (sentinel ADDRESS_ZERO)
    2. Загрузка пары из хранилища
    3. Принадлежность токена паре
    4. Порог ликвидности (строго больше)
    5. Цена второй стороны (неизвестна → 0, поиск прекращается)
    """

    def __init__(
        self,
        store: EntityStore,
        registry: PairRegistry,
        config: Optional[PricingConfig] = None,
    ):
        """Инициализация поиска.

        Args:
            store: хранилище сущностей (снапшот)
            registry: реестр пар фабрики
            config: конфигурация (опционально, используется default)
        """
        self.store = store
        self.registry = registry
        self.config = config or PricingConfig()

    def compute_quote_price(self, token: Token) -> Decimal:
        """Цена одной единицы токена в quote-native-asset.

        Args:
            token: токен из снапшота

        Returns:
            Цена в quote-native-asset, 0 если цену вывести нельзя
        """
        if token.id == self.config.quote_token_id:
            return ONE_BD

        threshold = self.config.minimum_liquidity_threshold

        for whitelisted in self.config.whitelist:
            logger.debug("price lookup: token=%s whitelisted=%s", token.id, whitelisted)

            pair_id = self.registry.get_pair_address(token.id, whitelisted)
            if pair_id == ADDRESS_ZERO:
                continue

            pair = self.store.get_pair(pair_id)
            if pair is None:
                continue

            if not pair.contains(token.id):
                logger.debug("pair %s does not contain token %s", pair.id, token.id)
                continue

            if not pair.reserve_quote > threshold:
                continue

            counterparty_id = pair.counterparty_of(token.id)
            spot_price = pair.price_against_counterparty(token.id)
            counterparty = self.store.get_token(counterparty_id)
            if counterparty is None or not counterparty.has_quote_price:
                logger.debug(
                    "counterparty %s of pair %s has no quote price", counterparty_id, pair.id
                )
                return ZERO_BD

            with localcontext(DECIMAL_CONTEXT):
                return spot_price * counterparty.quote_price

        return ZERO_BD
