"""
Contract Validation Module

Модуль для валидации JSON контрактов ценового ядра.
"""

from .validators import (
    ContractValidator,
    PricingConfigValidator,
    SchemaLoader,
    get_schema_loader,
    validate_pricing_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PricingConfigValidator",
    # Functions
    "get_schema_loader",
    "validate_pricing_config",
]
