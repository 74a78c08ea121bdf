"""Discount reconciliation core.

Flow for one save of one bundle surface:
1) diff previous against desired tiers into a plan (``plan``)
2) delete retired codes, best effort
3) look up each desired code and update it in place or create it (``engine``)
4) aggregate per-tier failures into one outcome
"""

from __future__ import annotations

from .engine import Reconciler, ReconciliationOutcome, TierFailure
from .plan import ReconciliationPlan, Recount, build_plan
from .terms import DiscountTerms, derive_terms, percentage_fraction

__all__ = [
    "DiscountTerms",
    "ReconciliationOutcome",
    "ReconciliationPlan",
    "Reconciler",
    "Recount",
    "TierFailure",
    "build_plan",
    "derive_terms",
    "percentage_fraction",
]
