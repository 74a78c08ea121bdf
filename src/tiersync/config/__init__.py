"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import ReconcileConfig, get_reconcile_config
from .shopify import DEFAULT_SHOPIFY_API_VERSION, ShopifyConfig, get_shopify_config

__all__ = [
    "DEFAULT_SHOPIFY_API_VERSION",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "ShopifyConfig",
    "configure_logging",
    "get_reconcile_config",
    "get_shopify_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
