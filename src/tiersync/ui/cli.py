from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

import pydantic
from dotenv import load_dotenv

from tiersync.adapters.bundle_config import parse_bundle_config
from tiersync.adapters.shopify import ShopifyAdminClient
from tiersync.app import build_reconciler, lookup_code, reconcile_surface
from tiersync.config import (
    ReconcileConfig,
    configure_logging,
    get_reconcile_config,
    get_shopify_config,
)
from tiersync.domain.model import BundleSurface, TierIdentity

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from tiersync.domain.model import Tier

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile bundle discount codes with Shopify")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Bring one surface's discount codes in line with a tier set",
    )
    reconcile.add_argument(
        "--surface",
        type=BundleSurface,
        choices=list(BundleSurface),
        required=True,
        help="Bundle surface owning the codes",
    )
    reconcile.add_argument(
        "--desired",
        type=Path,
        required=True,
        help="JSON file holding the desired bundle configuration or tier list",
    )
    reconcile.add_argument(
        "--previous",
        type=Path,
        help="JSON file holding the previously saved configuration or tier list",
    )
    reconcile.add_argument(
        "--tier-identity",
        type=TierIdentity,
        choices=list(TierIdentity),
        help="Key deciding whether a previous tier is still present (defaults to config)",
    )

    lookup = subparsers.add_parser("lookup", help="Show the discount owning a code")
    lookup.add_argument("--code", type=str, required=True, help="Exact discount code")

    return parser.parse_args(list(argv))


def _load_tiers(path: Path | None) -> tuple[Tier, ...]:
    if path is None:
        return ()
    try:
        value = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if isinstance(value, list):
        value = {"discounts": value}
    try:
        return parse_bundle_config(value).discounts
    except pydantic.ValidationError as exc:
        raise ValueError(f"Invalid tiers in {path}: {exc}") from exc


def _reconcile_config(args: argparse.Namespace) -> ReconcileConfig:
    config = get_reconcile_config()
    if args.tier_identity is None:
        return config
    return ReconcileConfig(tier_identity=args.tier_identity, start_offset=config.start_offset)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    previous: tuple[Tier, ...] = ()
    desired: tuple[Tier, ...] = ()
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "reconcile":
            previous = _load_tiers(parsed_args.previous)
            desired = _load_tiers(parsed_args.desired)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            with ShopifyAdminClient(config=get_shopify_config()) as client:
                outcome = reconcile_surface(
                    parsed_args.surface,
                    previous,
                    desired,
                    reconciler=build_reconciler(
                        client=client, config=_reconcile_config(parsed_args)
                    ),
                )
            if not outcome.success:
                log.error("Reconciliation failed: %s", outcome.error)
                sys.exit(1)
            log.info(
                "Reconciliation finished: created=%s, updated=%s, deleted=%s",
                len(outcome.created),
                len(outcome.updated),
                len(outcome.deleted),
            )
        elif parsed_args.command == "lookup":
            with ShopifyAdminClient(config=get_shopify_config()) as client:
                record = lookup_code(parsed_args.code, client=client)
            if record is None:
                log.info("No discount owns code %s", parsed_args.code)
            else:
                log.info("Code %s: id=%s kind=%s", record.code, record.id, record.kind)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
