"""
Тесты для PricingConfig и JSON Schema контракта pricing_config

Проверяет:
- Значения по умолчанию (production-деплой)
- Нормализацию адресов и инварианты конфигурации
- Валидность самой схемы
- Загрузку деплой-конфигурации и пустые якоря
- Детекцию нарушений схемы
"""

import json
from decimal import Decimal
from importlib.resources import files
from pathlib import Path

import pytest
from jsonschema import ValidationError

from src.core.contracts import PricingConfigValidator, SchemaLoader, validate_pricing_config
from src.core.contracts.validators import SCHEMA_PACKAGE
from src.pricing.config import (
    DEFAULT_MINIMUM_LIQUIDITY_THRESHOLD,
    DEFAULT_WHITELIST,
    USDC_ADDRESS,
    USDC_WETH_PAIR,
    WETH_ADDRESS,
    AnchorPair,
    AnchorPairSet,
    PricingConfig,
    QuoteSide,
    load_pricing_config,
)

DEPLOYMENT_CONFIG = Path(__file__).parent.parent.parent / "contracts" / "pricing_config.json"

TOKEN_A = "0x" + "a" * 40
PAIR_1 = "0x" + "1" * 40
PAIR_2 = "0x" + "2" * 40


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_config_data() -> dict:
    """Валидная деплой-конфигурация с тремя якорями."""
    return {
        "quote_token_id": WETH_ADDRESS,
        "whitelist": [WETH_ADDRESS, USDC_ADDRESS],
        "anchor_pairs": {
            "primary": {"pair_id": PAIR_1, "quote_side": "token1", "label": "USDC"},
            "secondary": {"pair_id": PAIR_2, "quote_side": "token1", "label": "DAI"},
            "tertiary": {"pair_id": "0x" + "3" * 40, "quote_side": "token0", "label": "USDT"},
        },
        "minimum_liquidity_threshold": "2.5",
    }


# =============================================================================
# PRICING CONFIG
# =============================================================================


class TestPricingConfig:
    """Тесты для PricingConfig"""

    def test_defaults(self) -> None:
        config = PricingConfig()

        assert config.quote_token_id == WETH_ADDRESS
        assert config.whitelist == DEFAULT_WHITELIST
        assert config.minimum_liquidity_threshold == DEFAULT_MINIMUM_LIQUIDITY_THRESHOLD
        assert config.anchor_pairs.primary is not None
        assert config.anchor_pairs.primary.pair_id == USDC_WETH_PAIR
        assert config.anchor_pairs.primary.quote_side is QuoteSide.TOKEN1
        assert config.anchor_pairs.secondary is None
        assert config.anchor_pairs.tertiary is None

    def test_whitelist_order_preserved(self) -> None:
        config = PricingConfig(whitelist=(USDC_ADDRESS, TOKEN_A, WETH_ADDRESS))
        assert config.whitelist == (USDC_ADDRESS, TOKEN_A, WETH_ADDRESS)

    def test_addresses_lowercased(self) -> None:
        config = PricingConfig(
            quote_token_id=WETH_ADDRESS.upper().replace("0X", "0x"),
            whitelist=("0xD13462dFfbB34aEC56c651534EE05dA44D8A4Cbe",),
        )
        assert config.quote_token_id == WETH_ADDRESS
        assert config.whitelist == (USDC_ADDRESS,)
        assert config.is_whitelisted("0xD13462DFFBB34AEC56C651534EE05DA44D8A4CBE".replace("0X", "0x"))

    def test_duplicate_whitelist_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate whitelist"):
            PricingConfig(whitelist=(TOKEN_A, TOKEN_A.upper().replace("0X", "0x")))

    def test_empty_quote_token_rejected(self) -> None:
        with pytest.raises(ValueError, match="quote_token_id"):
            PricingConfig(quote_token_id="  ")

    def test_negative_threshold_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            PricingConfig(minimum_liquidity_threshold=Decimal("-1"))

    def test_float_threshold_rejected(self) -> None:
        with pytest.raises(TypeError):
            PricingConfig(minimum_liquidity_threshold=2.0)  # type: ignore[arg-type]

    def test_threshold_from_string(self) -> None:
        config = PricingConfig(minimum_liquidity_threshold="0.5")  # type: ignore[arg-type]
        assert config.minimum_liquidity_threshold == Decimal("0.5")

    def test_immutability(self) -> None:
        config = PricingConfig()
        with pytest.raises(AttributeError):
            config.whitelist = ()  # type: ignore[misc]


class TestAnchorPairs:
    """Тесты для AnchorPair / AnchorPairSet"""

    def test_empty_pair_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            AnchorPair(pair_id="", quote_side=QuoteSide.TOKEN1)

    def test_quote_side_from_string(self) -> None:
        anchor = AnchorPair(pair_id=PAIR_1, quote_side="token0")  # type: ignore[arg-type]
        assert anchor.quote_side is QuoteSide.TOKEN0

    def test_duplicate_anchor_rejected(self) -> None:
        anchor = AnchorPair(pair_id=PAIR_1, quote_side=QuoteSide.TOKEN1)
        with pytest.raises(ValueError, match="Duplicate anchor"):
            AnchorPairSet(primary=anchor, secondary=anchor)

    def test_configured_order(self) -> None:
        primary = AnchorPair(pair_id=PAIR_1, quote_side=QuoteSide.TOKEN1)
        tertiary = AnchorPair(pair_id=PAIR_2, quote_side=QuoteSide.TOKEN0)
        anchors = AnchorPairSet(primary=primary, tertiary=tertiary)
        assert anchors.configured() == (primary, tertiary)


# =============================================================================
# SCHEMA
# =============================================================================


class TestSchema:
    """Тесты для pricing_config.json"""

    def test_schema_is_valid(self) -> None:
        schema = SchemaLoader().load_schema("pricing_config")
        assert schema["title"] == "PricingConfig"

    def test_missing_schema_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_schema_shipped_as_package_data(self) -> None:
        """Схема читается из пакета, а не из корня репозитория"""
        resource = files(SCHEMA_PACKAGE).joinpath("schema").joinpath("pricing_config.json")

        assert resource.is_file()
        assert SchemaLoader().load_schema("pricing_config") == json.loads(
            resource.read_text(encoding="utf-8")
        )

    def test_custom_schema_dir(self, tmp_path: Path) -> None:
        (tmp_path / "minimal.json").write_text(
            json.dumps({"$schema": "https://json-schema.org/draft/2020-12/schema", "type": "object"})
        )
        assert SchemaLoader(tmp_path).load_schema("minimal")["type"] == "object"

    def test_missing_schema_dir_raises(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "missing")

    def test_valid_data(self, valid_config_data: dict) -> None:
        validate_pricing_config(valid_config_data)
        assert PricingConfigValidator().is_valid(valid_config_data)

    def test_missing_required_field(self, valid_config_data: dict) -> None:
        del valid_config_data["whitelist"]
        with pytest.raises(ValidationError, match="whitelist"):
            validate_pricing_config(valid_config_data)

    def test_invalid_quote_side(self, valid_config_data: dict) -> None:
        valid_config_data["anchor_pairs"]["primary"]["quote_side"] = "token2"
        assert not PricingConfigValidator().is_valid(valid_config_data)

    def test_invalid_address(self, valid_config_data: dict) -> None:
        valid_config_data["whitelist"].append("0x1234")
        errors = list(PricingConfigValidator().iter_errors(valid_config_data))
        assert len(errors) == 1

    def test_threshold_must_be_decimal_string(self, valid_config_data: dict) -> None:
        valid_config_data["minimum_liquidity_threshold"] = 2
        assert not PricingConfigValidator().is_valid(valid_config_data)
        valid_config_data["minimum_liquidity_threshold"] = "-2"
        assert not PricingConfigValidator().is_valid(valid_config_data)


# =============================================================================
# LOADER
# =============================================================================


class TestLoadPricingConfig:
    """Тесты для load_pricing_config"""

    def test_load_deployment_file(self) -> None:
        """Деплой-файл: пустые DAI/USDT якоря → не сконфигурированы"""
        config = load_pricing_config(DEPLOYMENT_CONFIG)

        assert config.quote_token_id == WETH_ADDRESS
        assert config.whitelist == (WETH_ADDRESS, USDC_ADDRESS)
        assert config.minimum_liquidity_threshold == Decimal("2")
        assert config.anchor_pairs.primary is not None
        assert config.anchor_pairs.primary.pair_id == USDC_WETH_PAIR
        assert config.anchor_pairs.primary.label == "USDC"
        assert config.anchor_pairs.secondary is None
        assert config.anchor_pairs.tertiary is None

    def test_deployment_file_matches_defaults(self) -> None:
        assert load_pricing_config(DEPLOYMENT_CONFIG) == PricingConfig()

    def test_load_from_dict(self, valid_config_data: dict) -> None:
        config = load_pricing_config(valid_config_data)

        assert config.minimum_liquidity_threshold == Decimal("2.5")
        assert len(config.anchor_pairs.configured()) == 3
        assert config.anchor_pairs.tertiary is not None
        assert config.anchor_pairs.tertiary.quote_side is QuoteSide.TOKEN0

    def test_load_from_path_string(self, tmp_path: Path, valid_config_data: dict) -> None:
        path = tmp_path / "pricing_config.json"
        path.write_text(json.dumps(valid_config_data), encoding="utf-8")

        config = load_pricing_config(str(path))
        assert config.anchor_pairs.secondary is not None
        assert config.anchor_pairs.secondary.pair_id == PAIR_2

    def test_invalid_data_raises(self, valid_config_data: dict) -> None:
        valid_config_data["extra"] = True
        with pytest.raises(ValidationError):
            load_pricing_config(valid_config_data)

    def test_case_insensitive_duplicates_raise(self, valid_config_data: dict) -> None:
        valid_config_data["whitelist"] = [USDC_ADDRESS, "0xD13462dFfbB34aEC56c651534EE05dA44D8A4Cbe"]
        with pytest.raises(ValueError, match="Duplicate whitelist"):
            load_pricing_config(valid_config_data)
