"""
Bundle — синглтон с USD-ценой quote-native-asset.

Обновляется внешним pipeline один раз на обработанное событие.
"""

from decimal import Decimal
from typing import Any, Final, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.domain.fields import coerce_decimal

BUNDLE_ID: Final[str] = "1"


class Bundle(BaseModel):
    """Глобальный bundle (id всегда "1" в индексаторе)."""

    id: str = Field(BUNDLE_ID, min_length=1, description="Идентификатор bundle")
    quote_usd_price: Optional[Decimal] = Field(
        None, ge=0, description="USD-цена quote-native-asset (nullable)"
    )

    model_config = {"frozen": True}

    @field_validator("quote_usd_price", mode="before")
    @classmethod
    def validate_quote_usd_price(cls, v: Any) -> Any:
        return coerce_decimal(v)

    def with_quote_usd_price(self, quote_usd_price: Optional[Decimal]) -> "Bundle":
        """Копия bundle с новой ценой."""
        return Bundle(id=self.id, quote_usd_price=quote_usd_price)
