"""Domain types for bundle tiers and remote discount records (pure, dependency-light)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

METAFIELD_NAMESPACE: Final[str] = "bundle_builder"

MAX_PERCENTAGE: Final[float] = 100


class DiscountKind(StrEnum):
    BASIC = "basic"
    BUY_X_GET_Y = "buy_x_get_y"
    FREE_SHIPPING = "free_shipping"
    UNKNOWN = "unknown"


class TierIdentity(StrEnum):
    """Key used to decide whether a previous tier is still present in a desired set."""

    PERCENTAGE = "percentage"
    PERCENTAGE_AND_COUNT = "percentage_and_count"


class BundleSurface(StrEnum):
    """Storefront surfaces that own a bundle configuration and a code namespace."""

    CART = "cart"
    PRODUCT_PAGE = "product_page"

    @property
    def metafield_key(self) -> str:
        return _SURFACE_KEYS[self]

    @property
    def prefix(self) -> str:
        return _SURFACE_PREFIXES[self]


_SURFACE_KEYS: Final[dict[BundleSurface, str]] = {
    BundleSurface.CART: "config",
    BundleSurface.PRODUCT_PAGE: "product_page",
}

_SURFACE_PREFIXES: Final[dict[BundleSurface, str]] = {
    BundleSurface.CART: "fubndl",
    BundleSurface.PRODUCT_PAGE: "fuprbl",
}


@dataclass(frozen=True, slots=True)
class Tier:
    """Buy ``count`` or more items, get ``percentage`` percent off."""

    count: int
    percentage: int | float

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 1:
            raise ValueError(f"Tier count must be an integer >= 1, got {self.count!r}")
        if isinstance(self.percentage, bool) or not isinstance(self.percentage, int | float):
            raise ValueError(f"Tier percentage must be a number, got {self.percentage!r}")
        if math.isnan(self.percentage) or not 0 < self.percentage <= MAX_PERCENTAGE:
            raise ValueError(f"Tier percentage must be in (0, 100], got {self.percentage!r}")

    def key(self, identity: TierIdentity = TierIdentity.PERCENTAGE) -> tuple[float, ...]:
        if identity is TierIdentity.PERCENTAGE_AND_COUNT:
            return (float(self.percentage), float(self.count))
        return (float(self.percentage),)


@dataclass(frozen=True, slots=True)
class DiscountRecord:
    """Normalized view of one remote code discount."""

    id: str
    code: str
    kind: DiscountKind
    title: str | None = None

    @property
    def is_basic(self) -> bool:
        return self.kind is DiscountKind.BASIC

    def matches_code(self, code: str) -> bool:
        return self.code.casefold() == code.casefold()


@dataclass(frozen=True, slots=True)
class BundleConfig:
    """Products and tiers stored for one bundle surface.

    Products are opaque references owned by the UI; only the tiers drive discounts.
    """

    products: tuple[dict[str, object], ...] = ()
    discounts: tuple[Tier, ...] = field(default_factory=tuple)
