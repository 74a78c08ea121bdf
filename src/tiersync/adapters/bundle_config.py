"""Pydantic models for the stored bundle configuration blob and save requests."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tiersync.domain.model import MAX_PERCENTAGE, BundleConfig, Tier


class TierPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    count: int = Field(ge=1)
    percentage: int | float

    @field_validator("percentage")
    @classmethod
    def _percentage_in_range(cls, value: float) -> float:
        if not 0 < value <= MAX_PERCENTAGE:
            raise ValueError(f"percentage must be in (0, {MAX_PERCENTAGE}]")
        return value

    def to_domain(self) -> Tier:
        return Tier(count=self.count, percentage=self.percentage)


class BundleConfigPayload(BaseModel):
    """JSON shape shared by the metafield value and the save request body."""

    model_config = ConfigDict(extra="allow")

    products: list[dict[str, Any]] = Field(default_factory=list[dict[str, Any]])
    discounts: list[TierPayload] = Field(default_factory=list[TierPayload])

    @field_validator("products", "discounts", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value

    def to_domain(self) -> BundleConfig:
        return BundleConfig(
            products=tuple(self.products),
            discounts=tuple(tier.to_domain() for tier in self.discounts),
        )


def parse_bundle_config(value: object) -> BundleConfig:
    """Validate a decoded JSON value; ``None`` means nothing was stored yet."""

    if value is None:
        return BundleConfig()
    return BundleConfigPayload.model_validate(value).to_domain()


def dump_bundle_config(config: BundleConfig) -> dict[str, object]:
    return {
        "products": [dict(product) for product in config.products],
        "discounts": [
            {"count": tier.count, "percentage": tier.percentage} for tier in config.discounts
        ],
    }
