"""
PricingConfig — статическая конфигурация ценового ядра

Определяет топологию поиска цен:
- quote_token_id: адрес quote-native-asset (WETH)
- whitelist: упорядоченный список доверенных токенов (порядок = приоритет)
- anchor_pairs: до трёх якорных пар quote-native-asset / stablecoin
- minimum_liquidity_threshold: минимальный reserve_quote пары для учёта цены

Конфигурация передаётся в компоненты при создании; глобального состояния нет.
Значения по умолчанию соответствуют production-деплою индексатора.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Final, Optional, Union

from src.core.contracts import validate_pricing_config
from src.core.domain.fields import normalize_id
from src.core.math.decimal_safeguards import to_decimal, validate_non_negative


# =============================================================================
# DEFAULTS
# =============================================================================

WETH_ADDRESS: Final[str] = "0x4200000000000000000000000000000000000006"
USDC_ADDRESS: Final[str] = "0xd13462dffbb34aec56c651534ee05da44d8a4cbe"
USDC_WETH_PAIR: Final[str] = "0x85528565bf1972aa1dea76c0fd23a97d917bc5d2"

DEFAULT_WHITELIST: Final[tuple[str, ...]] = (
    WETH_ADDRESS,
    USDC_ADDRESS,
)

DEFAULT_MINIMUM_LIQUIDITY_THRESHOLD: Final[Decimal] = Decimal("2")


# =============================================================================
# ANCHOR PAIRS
# =============================================================================


class QuoteSide(str, Enum):
    """Сторона якорной пары, на которой находится quote-native-asset"""

    TOKEN0 = "token0"
    TOKEN1 = "token1"


@dataclass(frozen=True)
class AnchorPair:
    """Якорная пара quote-native-asset / stablecoin."""

    pair_id: str
    quote_side: QuoteSide
    label: str = ""  # "USDC", "DAI", ... (только для логов)

    def __post_init__(self) -> None:
        pair_id = normalize_id(self.pair_id)
        if not pair_id:
            raise ValueError("AnchorPair.pair_id must be non-empty")
        object.__setattr__(self, "pair_id", pair_id)
        object.__setattr__(self, "quote_side", QuoteSide(self.quote_side))


@dataclass(frozen=True)
class AnchorPairSet:
    """Набор якорных пар по уровню доверия.

    primary — самая ликвидная пара (единственная достаточная),
    secondary — вместе с primary образует двухякорную ветку,
    tertiary — нужна только для трёхякорной ветки.
    """

    primary: Optional[AnchorPair] = None
    secondary: Optional[AnchorPair] = None
    tertiary: Optional[AnchorPair] = None

    def __post_init__(self) -> None:
        ids = [a.pair_id for a in self.configured()]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate anchor pair ids: {ids}")

    def configured(self) -> tuple[AnchorPair, ...]:
        """Все сконфигурированные якоря в порядке primary → tertiary."""
        return tuple(a for a in (self.primary, self.secondary, self.tertiary) if a is not None)


DEFAULT_ANCHOR_PAIRS: Final[AnchorPairSet] = AnchorPairSet(
    primary=AnchorPair(pair_id=USDC_WETH_PAIR, quote_side=QuoteSide.TOKEN1, label="USDC"),
)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PricingConfig:
    """Конфигурация ценового ядра.

    Неизменяема; для тестов и альтернативных деплоев создаётся новый экземпляр.
    """

    quote_token_id: str = WETH_ADDRESS
    whitelist: tuple[str, ...] = DEFAULT_WHITELIST
    anchor_pairs: AnchorPairSet = DEFAULT_ANCHOR_PAIRS
    minimum_liquidity_threshold: Decimal = DEFAULT_MINIMUM_LIQUIDITY_THRESHOLD

    def __post_init__(self) -> None:
        quote_token_id = normalize_id(self.quote_token_id)
        if not quote_token_id:
            raise ValueError("quote_token_id must be non-empty")
        object.__setattr__(self, "quote_token_id", quote_token_id)

        whitelist = tuple(normalize_id(t) for t in self.whitelist)
        if any(not t for t in whitelist):
            raise ValueError("whitelist entries must be non-empty")
        if len(whitelist) != len(set(whitelist)):
            raise ValueError(f"Duplicate whitelist entries: {whitelist}")
        object.__setattr__(self, "whitelist", whitelist)

        threshold = validate_non_negative(
            to_decimal(self.minimum_liquidity_threshold), "minimum_liquidity_threshold"
        )
        object.__setattr__(self, "minimum_liquidity_threshold", threshold)

    def is_whitelisted(self, token_id: str) -> bool:
        """Входит ли токен в whitelist."""
        return normalize_id(token_id) in self.whitelist


# =============================================================================
# DEPLOYMENT LOADER
# =============================================================================


def _anchor_from_dict(data: Optional[Mapping[str, Any]]) -> Optional[AnchorPair]:
    # Пустой pair_id: якорь ещё не задеплоен
    if not data or not data.get("pair_id"):
        return None
    return AnchorPair(
        pair_id=data["pair_id"],
        quote_side=QuoteSide(data["quote_side"]),
        label=data.get("label", ""),
    )


def load_pricing_config(source: Union[str, Path, Mapping[str, Any]]) -> PricingConfig:
    """
    Загрузка деплой-конфигурации.

    Args:
        source: Путь к JSON-файлу или уже разобранный dict

    Returns:
        PricingConfig

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют pricing_config.json
        ValueError: Если данные нарушают инварианты PricingConfig
    """
    if isinstance(source, Mapping):
        data = dict(source)
    else:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)

    validate_pricing_config(data)

    anchors = data["anchor_pairs"]
    return PricingConfig(
        quote_token_id=data["quote_token_id"],
        whitelist=tuple(data["whitelist"]),
        anchor_pairs=AnchorPairSet(
            primary=_anchor_from_dict(anchors.get("primary")),
            secondary=_anchor_from_dict(anchors.get("secondary")),
            tertiary=_anchor_from_dict(anchors.get("tertiary")),
        ),
        minimum_liquidity_threshold=to_decimal(data["minimum_liquidity_threshold"]),
    )
