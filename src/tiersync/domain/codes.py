"""Deterministic discount codes and titles for bundle tiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import Tier


def format_percentage(value: float) -> str:
    # stored JSON numbers render ``15.0`` as ``15``
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def code_for(tier: Tier, prefix: str) -> str:
    """Return the discount code owned by ``prefix`` for this tier's percentage."""

    return f"{prefix}-{format_percentage(tier.percentage)}"


def title_for(tier: Tier) -> str:
    noun = "item" if tier.count == 1 else "items"
    return f"{format_percentage(tier.percentage)}% off when you buy {tier.count}+ {noun}"
