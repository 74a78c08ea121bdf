"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import pydantic

from tiersync.adapters.bundle_config import dump_bundle_config, parse_bundle_config
from tiersync.adapters.shopify import (
    ShopifyAdminClient,
    ShopifyDiscountLookup,
    ShopifyDiscountMutator,
)
from tiersync.config import get_reconcile_config, get_shopify_config
from tiersync.domain.model import METAFIELD_NAMESPACE, BundleConfig
from tiersync.domain.reconciliation import Reconciler

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tiersync.adapters.shopify import GraphQLClient
    from tiersync.config import ReconcileConfig
    from tiersync.domain.model import BundleSurface, DiscountRecord, Tier
    from tiersync.domain.ports import ConfigStore
    from tiersync.domain.reconciliation import ReconciliationOutcome

log = getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save bundle configuration"


@dataclass(slots=True)
class SaveBundleResult:
    """Outcome of one save: configuration write plus discount reconciliation."""

    success: bool
    error: str | None = None
    outcome: ReconciliationOutcome | None = None

    def as_response(self) -> dict[str, object]:
        return {"success": self.success, "error": self.error}


def build_reconciler(
    *,
    client: GraphQLClient | None = None,
    config: ReconcileConfig | None = None,
) -> Reconciler:
    """Wire a reconciler to one GraphQL client shared by lookup and mutations.

    A client created here is never closed; pass one in to control its lifetime.
    """

    effective_client = client or ShopifyAdminClient(config=get_shopify_config())
    effective_config = config or get_reconcile_config()
    return Reconciler(
        lookup=ShopifyDiscountLookup(effective_client),
        mutator=ShopifyDiscountMutator(effective_client),
        identity=effective_config.tier_identity,
        start_offset=effective_config.start_offset,
    )


def reconcile_surface(
    surface: BundleSurface,
    previous: Sequence[Tier],
    desired: Sequence[Tier],
    *,
    reconciler: Reconciler | None = None,
) -> ReconciliationOutcome:
    log.info("Reconciling %s surface discounts under prefix %s", surface, surface.prefix)
    if reconciler is not None:
        return reconciler.reconcile(previous, desired, surface.prefix)
    with ShopifyAdminClient(config=get_shopify_config()) as client:
        return build_reconciler(client=client).reconcile(previous, desired, surface.prefix)


def lookup_code(code: str, *, client: GraphQLClient | None = None) -> DiscountRecord | None:
    if client is not None:
        return ShopifyDiscountLookup(client).find_by_code(code)
    with ShopifyAdminClient(config=get_shopify_config()) as owned:
        return ShopifyDiscountLookup(owned).find_by_code(code)


def save_bundle_config(
    surface: BundleSurface,
    payload: object,
    *,
    store: ConfigStore,
    reconciler: Reconciler | None = None,
) -> SaveBundleResult:
    """Persist a bundle configuration, then reconcile its discount codes.

    Nothing is mutated on the platform unless the configuration write succeeded:
    the stored configuration is the source of truth for the next save's diff.
    """

    try:
        desired = parse_bundle_config(payload)
    except pydantic.ValidationError as exc:
        log.warning("Rejected %s bundle configuration: %s", surface, exc)
        return SaveBundleResult(success=False, error=f"Invalid bundle configuration: {exc}")

    try:
        previous = _load_previous(store, surface)
        if not store.set(METAFIELD_NAMESPACE, surface.metafield_key, dump_bundle_config(desired)):
            log.error("Configuration store rejected the %s bundle configuration", surface)
            return SaveBundleResult(success=False, error=SAVE_FAILED_MESSAGE)

        outcome = reconcile_surface(
            surface,
            previous.discounts,
            desired.discounts,
            reconciler=reconciler,
        )
    except Exception as exc:  # noqa: BLE001
        log.exception("Saving the %s bundle configuration failed", surface)
        return SaveBundleResult(success=False, error=str(exc) or "Unknown server error")

    if outcome.success:
        return SaveBundleResult(success=True, outcome=outcome)
    return SaveBundleResult(
        success=False,
        error=f"Configuration saved but discounts failed: {outcome.error}",
        outcome=outcome,
    )


def _load_previous(store: ConfigStore, surface: BundleSurface) -> BundleConfig:
    stored = store.get(METAFIELD_NAMESPACE, surface.metafield_key)
    try:
        return parse_bundle_config(stored)
    except pydantic.ValidationError as exc:
        log.warning(
            "Ignoring unreadable stored %s configuration, no codes will be retired: %s",
            surface,
            exc,
        )
        return BundleConfig()
