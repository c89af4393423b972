"""
Pair — Модель торговой пары (пула ликвидности)

Immutable Pydantic модель пары из снапшота индексатора.

Спотовые цены поддерживаются внешним pipeline из резервов:
- token0_price = reserve0 / reserve1 (сколько token0 за один token1)
- token1_price = reserve1 / reserve0 (сколько token1 за один token0)

reserve_quote — полная стоимость пула в quote-native-asset.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.domain.fields import coerce_decimal, normalize_id


class Pair(BaseModel):
    """
    Модель пары.

    Immutable модель (frozen=True). Все decimal-поля неотрицательны.
    """

    # Идентификация
    id: str = Field(..., min_length=1, description="Адрес пары (lower-case)")
    token0: str = Field(..., min_length=1, description="Адрес token0")
    token1: str = Field(..., min_length=1, description="Адрес token1")

    # Резервы
    reserve0: Decimal = Field(..., ge=0, description="Резерв token0")
    reserve1: Decimal = Field(..., ge=0, description="Резерв token1")
    reserve_quote: Decimal = Field(
        ..., ge=0, description="Стоимость пула в quote-native-asset"
    )

    # Спотовые цены
    token0_price: Decimal = Field(..., ge=0, description="token0 за один token1")
    token1_price: Decimal = Field(..., ge=0, description="token1 за один token0")

    model_config = {"frozen": True}

    @field_validator("id", "token0", "token1", mode="before")
    @classmethod
    def validate_ids(cls, v: Any) -> Any:
        return normalize_id(v)

    @field_validator(
        "reserve0", "reserve1", "reserve_quote", "token0_price", "token1_price",
        mode="before",
    )
    @classmethod
    def validate_decimals(cls, v: Any) -> Any:
        return coerce_decimal(v)

    @model_validator(mode="after")
    def validate_distinct_tokens(self) -> "Pair":
        """Пара из одного и того же токена невозможна."""
        if self.token0 == self.token1:
            raise ValueError(f"Pair {self.id} has identical token0 and token1: {self.token0}")
        return self

    def contains(self, token_id: str) -> bool:
        """Входит ли токен в пару."""
        token_id = normalize_id(token_id)
        return token_id in (self.token0, self.token1)

    def counterparty_of(self, token_id: str) -> Optional[str]:
        """
        Вторая сторона пары.

        Args:
            token_id: Адрес одной из сторон

        Returns:
            Адрес другой стороны, или None если токен не входит в пару
        """
        token_id = normalize_id(token_id)
        if token_id == self.token0:
            return self.token1
        if token_id == self.token1:
            return self.token0
        return None

    def price_against_counterparty(self, token_id: str) -> Optional[Decimal]:
        """
        Спотовая цена токена в единицах второй стороны.

        token0 → token1_price (token1 за один token0),
        token1 → token0_price (token0 за один token1).

        Returns:
            Цена, или None если токен не входит в пару
        """
        token_id = normalize_id(token_id)
        if token_id == self.token0:
            return self.token1_price
        if token_id == self.token1:
            return self.token0_price
        return None
