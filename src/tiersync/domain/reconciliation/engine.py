"""Apply a reconciliation plan against the discount platform.

The engine owns the partial-failure contract of a save:

- deletions first, in the order of the previous tiers, then upserts in the order of
  the desired tiers, strictly one remote call at a time
- a failure for one tier never stops the others
- deletion is best effort: failures are logged and never fail the outcome
- every basic discount owning a retired code is deleted; other kinds are left
  in place and reported as delete failures
- a desired tier whose code belongs to a non-basic discount fails without any
  mutation being issued

There is no transaction on the platform side; the aggregated outcome is the only
boundary and the next save converges whatever a failed save left behind.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from tiersync.domain.codes import code_for
from tiersync.domain.errors import DiscountSyncError, IncompatibleKindError
from tiersync.domain.model import TierIdentity

from .plan import ReconciliationPlan, build_plan
from .terms import DEFAULT_START_OFFSET, derive_terms

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import timedelta

    from tiersync.domain.model import Tier
    from tiersync.domain.ports import DiscountLookup, DiscountMutator, MutationResult

log = getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class TierFailure:
    code: str
    message: str


@dataclass(slots=True)
class ReconciliationOutcome:
    """Caller-facing result of one reconciliation."""

    deleted: list[str] = field(default_factory=list[str])
    created: list[str] = field(default_factory=list[str])
    updated: list[str] = field(default_factory=list[str])
    failures: list[TierFailure] = field(default_factory=list[TierFailure])
    delete_failures: list[TierFailure] = field(default_factory=list[TierFailure])
    recounted: list[str] = field(default_factory=list[str])

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def error(self) -> str | None:
        if not self.failures:
            return None
        return ", ".join(failure.message for failure in self.failures)

    def as_response(self) -> dict[str, object]:
        return {"success": self.success, "error": self.error}


@dataclass(slots=True)
class Reconciler:
    """Bring the remote codes of one namespace in line with a desired tier set."""

    lookup: DiscountLookup
    mutator: DiscountMutator
    identity: TierIdentity = TierIdentity.PERCENTAGE
    clock: Clock = _utcnow
    start_offset: timedelta = DEFAULT_START_OFFSET

    def plan(
        self,
        previous: Sequence[Tier],
        desired: Sequence[Tier],
        prefix: str,
    ) -> ReconciliationPlan:
        return build_plan(previous, desired, prefix, identity=self.identity)

    def reconcile(
        self,
        previous: Sequence[Tier],
        desired: Sequence[Tier],
        prefix: str,
    ) -> ReconciliationOutcome:
        plan = self.plan(previous, desired, prefix)
        outcome = ReconciliationOutcome()
        log.info(
            "Reconciling %s: previous=%s, desired=%s, to_delete=%s",
            prefix,
            len(previous),
            len(desired),
            plan.to_delete,
        )
        for recount in plan.recounts:
            outcome.recounted.append(recount.code)
            log.warning(
                "Tier %s changed minimum count %s -> %s; updating the existing code in place",
                recount.code,
                recount.previous_count,
                recount.desired_count,
            )

        for code in plan.to_delete:
            self._delete(code, outcome)

        for tier in plan.to_upsert:
            self._upsert(tier, prefix, outcome)

        if outcome.success:
            log.info(
                "Reconciled %s: created=%s, updated=%s, deleted=%s",
                prefix,
                outcome.created,
                outcome.updated,
                outcome.deleted,
            )
        else:
            log.warning("Reconciliation of %s finished with errors: %s", prefix, outcome.error)
        return outcome

    def _delete(self, code: str, outcome: ReconciliationOutcome) -> None:
        try:
            matches = self.lookup.find_matches(code)
        except DiscountSyncError as exc:
            log.warning("Lookup before deleting %s failed: %s", code, exc)
            outcome.delete_failures.append(TierFailure(code=code, message=str(exc)))
            return

        if not matches:
            log.info("Discount %s already absent; nothing to delete", code)
            return

        deleted = False
        for record in matches:
            if not record.is_basic:
                log.warning(
                    "Not deleting %s: owned by a %s discount (%s)", code, record.kind, record.id
                )
                message = str(IncompatibleKindError(code, record.kind))
                outcome.delete_failures.append(TierFailure(code=code, message=message))
                continue
            result = self.mutator.delete(record.id)
            if result.ok:
                log.info("Deleted discount %s (%s)", code, record.id)
                deleted = True
                continue
            log.warning("Failed to delete discount %s: %s", code, result.error)
            outcome.delete_failures.append(TierFailure(code=code, message=result.error or ""))

        if deleted:
            outcome.deleted.append(code)

    def _upsert(self, tier: Tier, prefix: str, outcome: ReconciliationOutcome) -> None:
        code = code_for(tier, prefix)
        try:
            record = self.lookup.find_updatable(code)
        except IncompatibleKindError as exc:
            log.error("Refusing to touch %s: %s", code, exc)
            outcome.failures.append(TierFailure(code=code, message=str(exc)))
            return
        except DiscountSyncError as exc:
            log.error("Lookup of %s failed: %s", code, exc)
            outcome.failures.append(TierFailure(code=code, message=str(exc)))
            return

        terms = derive_terms(tier, prefix, now=self.clock(), start_offset=self.start_offset)
        result: MutationResult
        if record is None:
            result = self.mutator.create(terms)
            done = outcome.created
        else:
            result = self.mutator.update(record.id, terms)
            done = outcome.updated

        if result.ok:
            done.append(code)
            return
        log.error("Mutation for %s failed: %s", code, result.error)
        outcome.failures.append(TierFailure(code=code, message=result.error or "unknown error"))
