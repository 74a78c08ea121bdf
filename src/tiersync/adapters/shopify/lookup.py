"""Find the remote discount that owns an exact code."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import pydantic

from tiersync.domain.errors import GraphError, IncompatibleKindError

from .queries import FIND_CODE_DISCOUNTS
from .schema import CodeDiscountSearchData

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tiersync.domain.model import DiscountRecord

    from .client import GraphQLClient

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 25


@dataclass(slots=True)
class ShopifyDiscountLookup:
    """Search code discounts and match one code exactly.

    The scoped ``code:<code>`` search is tried first. When it has no exact match the
    raw code is searched as well, since the platform's search index tokenizes codes
    inconsistently between the two shapes. Results are unioned and deduplicated by
    discount id. Nothing is cached between calls.
    """

    client: GraphQLClient
    page_size: int = DEFAULT_PAGE_SIZE

    def find_by_code(self, code: str) -> DiscountRecord | None:
        """Return the first discount owning ``code``; duplicates are logged, not merged."""

        matches = self.find_matches(code)
        if len(matches) > 1:
            log.warning(
                "Code %s matched %s discounts: %s",
                code,
                len(matches),
                ", ".join(record.id for record in matches),
            )
        return matches[0] if matches else None

    def find_updatable(self, code: str) -> DiscountRecord | None:
        matches = self.find_matches(code)
        for record in matches:
            if not record.is_basic:
                raise IncompatibleKindError(code, record.kind)
        return matches[0] if matches else None

    def find_matches(self, code: str) -> list[DiscountRecord]:
        candidates = self._search(f"code:{code}")
        matches = _exact_matches(candidates, code)
        if matches:
            return matches

        log.debug("No exact match for code:%s, retrying with the raw code", code)
        candidates.extend(self._search(code))
        return _exact_matches(candidates, code)

    def _search(self, query: str) -> list[DiscountRecord]:
        response = self.client.graphql(
            FIND_CODE_DISCOUNTS,
            {"query": query, "first": self.page_size},
        )
        if response.errors:
            raise GraphError(response.error_messages)
        try:
            data = CodeDiscountSearchData.model_validate(response.data or {})
        except pydantic.ValidationError as exc:
            msg = f"unexpected codeDiscountNodes payload ({exc.error_count()} errors)"
            raise GraphError([msg]) from exc
        return [record for node in data.code_discount_nodes.nodes for record in node.to_records()]


def _exact_matches(candidates: Iterable[DiscountRecord], code: str) -> list[DiscountRecord]:
    seen: set[str] = set()
    matches: list[DiscountRecord] = []
    for record in candidates:
        if record.id in seen or not record.matches_code(code):
            continue
        seen.add(record.id)
        matches.append(record)
    return matches
