"""Public interface for the Shopify adapter."""

from __future__ import annotations

from .client import GraphQLClient, ShopifyAdminClient
from .lookup import ShopifyDiscountLookup
from .mutations import ShopifyDiscountMutator, classify_payload
from .schema import CodeDiscountNode, GraphQLResponse
from .translator import basic_code_discount_input

__all__ = [
    "CodeDiscountNode",
    "GraphQLClient",
    "GraphQLResponse",
    "ShopifyAdminClient",
    "ShopifyDiscountLookup",
    "ShopifyDiscountMutator",
    "basic_code_discount_input",
    "classify_payload",
]
