"""
Decimal Safeguards — Safe Decimal Primitives

Модуль обеспечивает детерминированную арифметику для всех ценовых расчётов:
- Фиксированный decimal-контекст (точность и округление не зависят от вызывающего)
- Безопасное деление с защитой от деления на ноль
- Строгая конверсия входов в Decimal (float запрещён)
- Валидация неотрицательных значений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. Float никогда не попадает в расчёт (двоичная аппроксимация ломает replay)
3. Одинаковые входы всегда дают побитово одинаковый Decimal
4. Переполнение в расчёте поднимает decimal.Overflow, а не возвращает Infinity
"""

from decimal import (
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Final, Union

DecimalLike = Union[Decimal, int, str]


# =============================================================================
# КОНТЕКСТ И КОНСТАНТЫ
# =============================================================================

# 34 значащих цифры, как у decimal-типа индексатора (IEEE 754 decimal128)
DECIMAL_PRECISION: Final[int] = 34

DECIMAL_CONTEXT: Final[Context] = Context(
    prec=DECIMAL_PRECISION,
    rounding=ROUND_HALF_EVEN,
    Emin=-6143,
    Emax=6144,
    # Из ядра выходят только конечные значения
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

ZERO_BD: Final[Decimal] = Decimal("0")
ONE_BD: Final[Decimal] = Decimal("1")
TWO_BD: Final[Decimal] = Decimal("2")


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_decimal(value: DecimalLike) -> Decimal:
    """
    Строгая конверсия в Decimal.

    Args:
        value: Decimal, int или строковое представление числа

    Returns:
        Decimal с тем же значением

    Raises:
        TypeError: Если передан float, bool или неподдерживаемый тип
        ValueError: Если строка не является числом или значение NaN/Inf

    Examples:
        >>> to_decimal("0.0005")
        Decimal('0.0005')
        >>> to_decimal(2)
        Decimal('2')
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Expected Decimal, int or str, got {type(value).__name__}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except ArithmeticError as e:
            raise ValueError(f"Not a decimal number: {value!r}") from e
    else:
        raise TypeError(f"Expected Decimal, int or str, got {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Decimal value must be finite, got {result}")

    return result


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_div(
    numerator: Decimal,
    denominator: Decimal,
    fallback: Decimal = ZERO_BD,
) -> Decimal:
    """
    Безопасное деление в фиксированном контексте.

    Если знаменатель равен нулю, деление не выполняется и возвращается
    fallback. Вызывающий код всё равно обязан проверять знаменатель до
    входа в ветку с делением; эта функция — последняя линия.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        fallback: Значение при нулевом знаменателе (default: 0)

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_div(Decimal("10"), Decimal("4"))
        Decimal('2.5')
        >>> safe_div(Decimal("10"), Decimal("0"))
        Decimal('0')
    """
    if is_zero(denominator):
        return fallback

    with localcontext(DECIMAL_CONTEXT):
        return numerator / denominator


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


def is_zero(value: Decimal) -> bool:
    """Точное сравнение с нулём (без epsilon: Decimal не теряет точность)."""
    return value == ZERO_BD


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_non_negative(value: Decimal, name: str) -> Decimal:
    """
    Проверка, что значение неотрицательно.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        То же значение (для использования в validators)

    Raises:
        ValueError: Если значение отрицательно
    """
    if value < ZERO_BD:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value
