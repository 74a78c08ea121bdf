"""Discount terms derived from a tier for create and update mutations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Final

from tiersync.domain.codes import code_for, title_for

if TYPE_CHECKING:
    from tiersync.domain.model import Tier

DEFAULT_START_OFFSET: Final[timedelta] = timedelta(seconds=60)

_CENT = Decimal("0.01")


@dataclass(frozen=True, slots=True, kw_only=True)
class DiscountTerms:
    """Everything the platform needs to create or update one tier's basic code discount.

    Eligibility is global: every product, every customer. The discount never combines
    with other order, product or shipping discounts and is not limited to one use per
    customer.
    """

    title: str
    code: str
    percentage: float
    minimum_quantity: str
    starts_at: datetime
    combines_with_orders: bool = False
    combines_with_products: bool = False
    combines_with_shipping: bool = False
    applies_once_per_customer: bool = False


def percentage_fraction(percentage: float) -> float:
    """Return ``percentage / 100`` rounded half-up to two decimals (``33`` -> ``0.33``)."""

    fraction = Decimal(str(percentage)) / 100
    return float(fraction.quantize(_CENT, rounding=ROUND_HALF_UP))


def start_time(now: datetime, *, offset: timedelta = DEFAULT_START_OFFSET) -> datetime:
    # slightly in the past so platform clock skew never rejects the start
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return (now.astimezone(UTC) - offset).replace(microsecond=0)


def derive_terms(
    tier: Tier,
    prefix: str,
    *,
    now: datetime,
    start_offset: timedelta = DEFAULT_START_OFFSET,
) -> DiscountTerms:
    return DiscountTerms(
        title=title_for(tier),
        code=code_for(tier, prefix),
        percentage=percentage_fraction(tier.percentage),
        minimum_quantity=str(tier.count),
        starts_at=start_time(now, offset=start_offset),
    )
