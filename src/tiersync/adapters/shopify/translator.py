"""Translate domain discount terms into Shopify mutation inputs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from tiersync.domain.reconciliation import DiscountTerms


def format_datetime(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def basic_code_discount_input(terms: DiscountTerms) -> dict[str, object]:
    """Return a ``DiscountCodeBasicInput`` for a tier's quantity discount."""

    return {
        "title": terms.title,
        "code": terms.code,
        "startsAt": format_datetime(terms.starts_at),
        "customerSelection": {"all": True},
        "customerGets": {
            "value": {"percentage": terms.percentage},
            "items": {"all": True},
        },
        "minimumRequirement": {
            "quantity": {"greaterThanOrEqualToQuantity": terms.minimum_quantity},
        },
        "combinesWith": {
            "orderDiscounts": terms.combines_with_orders,
            "productDiscounts": terms.combines_with_products,
            "shippingDiscounts": terms.combines_with_shipping,
        },
        "appliesOncePerCustomer": terms.applies_once_per_customer,
    }
