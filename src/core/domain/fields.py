"""
Общие field-конвертеры для доменных моделей.

Адреса в индексаторе сравниваются как строки, поэтому приводятся к нижнему
регистру на входе. Decimal-поля принимают только Decimal/int/str.
"""

from decimal import Decimal
from typing import Any

from src.core.math.decimal_safeguards import to_decimal


def normalize_id(value: Any) -> Any:
    """Адрес/идентификатор → нижний регистр без пробелов по краям."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def coerce_decimal(value: Any) -> Any:
    """
    Строгая конверсия decimal-поля перед валидацией pydantic.

    None пропускается (отсутствие цены — валидное состояние).

    Raises:
        ValueError: Если передан float или строка не является числом
    """
    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise ValueError(f"float is not allowed for decimal fields, got {value!r}")
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        return to_decimal(value)
    return value
