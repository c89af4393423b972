"""
Token — Модель токена

Immutable Pydantic модель токена из снапшота индексатора.
quote_price — цена одной единицы токена в quote-native-asset (WETH).
Отсутствие цены означает "ещё не выводима", а не ошибку.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.domain.fields import coerce_decimal, normalize_id


class Token(BaseModel):
    """
    Модель токена.

    Immutable модель (frozen=True). Обновление цены создаёт новый экземпляр
    через model_copy; запись в хранилище делает внешний pipeline.
    """

    # Идентификация
    id: str = Field(..., min_length=1, description="Адрес токена (lower-case)")
    symbol: Optional[str] = Field(None, description="Тикер (nullable)")
    decimals: Optional[int] = Field(None, ge=0, description="Разрядность (nullable)")

    # Производная цена
    quote_price: Optional[Decimal] = Field(
        None, ge=0, description="Цена в quote-native-asset (nullable)"
    )

    model_config = {"frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> Any:
        return normalize_id(v)

    @field_validator("quote_price", mode="before")
    @classmethod
    def validate_quote_price(cls, v: Any) -> Any:
        return coerce_decimal(v)

    @property
    def has_quote_price(self) -> bool:
        """Известна ли цена токена."""
        return self.quote_price is not None

    def with_quote_price(self, quote_price: Optional[Decimal]) -> "Token":
        """
        Копия токена с новой ценой.

        Args:
            quote_price: Новая цена в quote-native-asset (или None)

        Returns:
            Новый экземпляр Token
        """
        return Token(
            id=self.id,
            symbol=self.symbol,
            decimals=self.decimals,
            quote_price=quote_price,
        )
