"""Shopify Admin API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SHOPIFY_API_VERSION = "2024-10"
SHOPIFY_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class ShopifyConfig:
    """Holds the shop domain, credentials and transport settings."""

    shop: str
    access_token: str
    api_version: str
    resilience: ResilienceConfig

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop}/admin/api/{self.api_version}/graphql.json"


def get_shopify_config(*, resilience: ResilienceConfig | None = None) -> ShopifyConfig:
    values = require_env_vars(("SHOPIFY_SHOP", "SHOPIFY_ACCESS_TOKEN"))
    shop = _normalize_shop(values["SHOPIFY_SHOP"])
    access_token = values["SHOPIFY_ACCESS_TOKEN"]
    api_version = optional_env_var("SHOPIFY_API_VERSION") or DEFAULT_SHOPIFY_API_VERSION

    return ShopifyConfig(
        shop=shop,
        access_token=access_token,
        api_version=api_version,
        resilience=resilience
        or ResilienceConfig(
            name="shopify",
            timeout_seconds=SHOPIFY_TIMEOUT_SECONDS,
            retry=RetryPolicy(),
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
            default_headers={
                "X-Shopify-Access-Token": access_token,
                "Content-Type": "application/json",
            },
        ),
    )


def _normalize_shop(value: str) -> str:
    shop = value.strip().removeprefix("https://").removeprefix("http://")
    return shop.rstrip("/")
