"""Reconciliation defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta

from tiersync.domain.model import TierIdentity

from .errors import ConfigurationError

DEFAULT_START_OFFSET_SECONDS = 60


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    tier_identity: TierIdentity = TierIdentity.PERCENTAGE
    start_offset: timedelta = field(
        default_factory=lambda: timedelta(seconds=DEFAULT_START_OFFSET_SECONDS)
    )


def get_reconcile_config() -> ReconcileConfig:
    identity_value = os.getenv("TIERSYNC_TIER_IDENTITY", TierIdentity.PERCENTAGE.value)
    offset_value = os.getenv("TIERSYNC_START_OFFSET_SECONDS", str(DEFAULT_START_OFFSET_SECONDS))
    try:
        identity = TierIdentity(identity_value.strip().lower())
    except ValueError as exc:
        raise ConfigurationError(f"Unknown tier identity: {identity_value}") from exc
    try:
        offset_seconds = int(offset_value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid start offset: {offset_value}") from exc
    if offset_seconds < 0:
        raise ConfigurationError("Start offset must be non-negative")
    return ReconcileConfig(tier_identity=identity, start_offset=timedelta(seconds=offset_seconds))
