from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from tests.support.discounts import FakeLookup, FakeMutator, InMemoryConfigStore
from tests.support.shopify import FakeShop
from tiersync.adapters.shopify import ShopifyDiscountLookup, ShopifyDiscountMutator
from tiersync.domain.reconciliation import Reconciler

if TYPE_CHECKING:
    from collections.abc import Iterator

FIXED_NOW = datetime(2025, 3, 1, 12, 0, 30, 500_000, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "SHOPIFY_SHOP",
        "SHOPIFY_ACCESS_TOKEN",
        "SHOPIFY_API_VERSION",
        "TIERSYNC_TIER_IDENTITY",
        "TIERSYNC_START_OFFSET_SECONDS",
        "TIERSYNC_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def shop() -> FakeShop:
    return FakeShop()


@pytest.fixture
def shop_reconciler(shop: FakeShop) -> Reconciler:
    return Reconciler(
        lookup=ShopifyDiscountLookup(shop),
        mutator=ShopifyDiscountMutator(shop),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def fake_lookup() -> FakeLookup:
    return FakeLookup()


@pytest.fixture
def fake_mutator() -> FakeMutator:
    return FakeMutator()


@pytest.fixture
def fake_reconciler(fake_lookup: FakeLookup, fake_mutator: FakeMutator) -> Reconciler:
    return Reconciler(lookup=fake_lookup, mutator=fake_mutator, clock=lambda: FIXED_NOW)


@pytest.fixture
def config_store() -> InMemoryConfigStore:
    return InMemoryConfigStore()
