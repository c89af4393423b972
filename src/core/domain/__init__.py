"""
Domain models and value objects.

Contains the indexed entities read by the pricing core: Token, Pair, Bundle.
"""

from src.core.domain.bundle import BUNDLE_ID, Bundle
from src.core.domain.fields import coerce_decimal, normalize_id
from src.core.domain.pair import Pair
from src.core.domain.token import Token

__all__ = [
    # Bundle
    "BUNDLE_ID",
    "Bundle",
    # Pair
    "Pair",
    # Token
    "Token",
    # Field helpers
    "coerce_decimal",
    "normalize_id",
]
