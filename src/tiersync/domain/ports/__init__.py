"""Domain port definitions for adapters."""

from __future__ import annotations

from .config_store import ConfigStore
from .discounts import DiscountLookup, DiscountMutator, MutationResult

__all__ = [
    "ConfigStore",
    "DiscountLookup",
    "DiscountMutator",
    "MutationResult",
]
