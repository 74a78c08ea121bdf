"""Ports for reading and mutating remote discount codes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tiersync.domain.model import DiscountRecord
    from tiersync.domain.reconciliation.terms import DiscountTerms


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Outcome of one remote mutation: ok, or an error message."""

    ok: bool
    error: str | None = None
    discount_id: str | None = None

    @classmethod
    def success(cls, discount_id: str | None = None) -> MutationResult:
        return cls(ok=True, discount_id=discount_id)

    @classmethod
    def failure(cls, error: str) -> MutationResult:
        return cls(ok=False, error=error)


@runtime_checkable
class DiscountLookup(Protocol):
    """Find the remote discount owning an exact code."""

    def find_matches(self, code: str) -> list[DiscountRecord]:
        """Every discount owning ``code``, compared case-insensitively."""
        ...

    def find_by_code(self, code: str) -> DiscountRecord | None: ...

    def find_updatable(self, code: str) -> DiscountRecord | None:
        """Like ``find_by_code`` but raise ``IncompatibleKindError`` for non-basic matches."""
        ...


@runtime_checkable
class DiscountMutator(Protocol):
    def create(self, terms: DiscountTerms) -> MutationResult: ...

    def update(self, discount_id: str, terms: DiscountTerms) -> MutationResult: ...

    def delete(self, discount_id: str) -> MutationResult: ...
