"""
Core domain models, decimal primitives, and contracts.

This module contains the building blocks of the pricing core that are
independent of the indexer runtime (event decoding, entity storage).
"""
