"""Reconciliation plan: which codes to delete and which tiers to upsert.

The plan is pure and ephemeral. It is computed once per save from the previous and
desired tier snapshots and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tiersync.domain.codes import code_for
from tiersync.domain.model import TierIdentity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tiersync.domain.model import Tier


@dataclass(frozen=True, slots=True)
class Recount:
    """A code kept across the save whose minimum item count changed."""

    code: str
    previous_count: int
    desired_count: int


@dataclass(slots=True)
class ReconciliationPlan:
    to_delete: list[str] = field(default_factory=list[str])
    to_upsert: list[Tier] = field(default_factory=list["Tier"])
    recounts: list[Recount] = field(default_factory=list[Recount])


def build_plan(
    previous: Sequence[Tier],
    desired: Sequence[Tier],
    prefix: str,
    *,
    identity: TierIdentity = TierIdentity.PERCENTAGE,
) -> ReconciliationPlan:
    """Diff ``previous`` against ``desired`` for one code namespace.

    Deletions keep the order of ``previous`` and upserts the order of ``desired``.
    Every desired tier is upserted, so a previous code that is still desired is
    updated in place and never deleted.

    ``identity`` decides when a kept code counts as a changed tier. Under
    ``PERCENTAGE`` a tier is its percentage and count-only edits go unreported.
    Under ``PERCENTAGE_AND_COUNT`` a kept code whose count changed is recorded
    as a recount.
    """

    plan = ReconciliationPlan(to_upsert=list(desired))
    desired_keys = {tier.key(identity) for tier in desired}
    desired_by_code = {code_for(tier, prefix): tier for tier in desired}

    for tier in previous:
        code = code_for(tier, prefix)
        kept = desired_by_code.get(code)
        if kept is None:
            if code not in plan.to_delete:
                plan.to_delete.append(code)
            continue
        if tier.key(identity) not in desired_keys:
            plan.recounts.append(
                Recount(code=code, previous_count=tier.count, desired_count=kept.count)
            )

    return plan
