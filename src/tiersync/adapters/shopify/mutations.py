"""Issue discount mutations and classify their responses."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import pydantic

from tiersync.domain.errors import DiscountSyncError, GraphError, ValidationError
from tiersync.domain.ports import MutationResult

from .queries import CREATE_BASIC_CODE_DISCOUNT, DELETE_CODE_DISCOUNT, UPDATE_BASIC_CODE_DISCOUNT
from .schema import BasicCreatePayload, DeletePayload, MutationPayload
from .translator import basic_code_discount_input

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tiersync.domain.reconciliation import DiscountTerms

    from .client import GraphQLClient
    from .schema import GraphQLResponse

log = getLogger(__name__)


def classify_payload[P: MutationPayload](
    response: GraphQLResponse,
    root: str,
    payload_type: type[P],
) -> P:
    """Return the mutation payload under ``root`` or raise the matching failure.

    Top-level ``errors`` win over ``userErrors``; only the first top-level message is
    kept. User errors are rendered ``field: message`` and joined.
    """

    if response.errors:
        raise GraphError(response.error_messages)
    raw = (response.data or {}).get(root)
    if raw is None:
        raise GraphError([f"response is missing {root}"])
    try:
        payload = payload_type.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise GraphError([f"unexpected {root} payload"]) from exc
    if payload.user_errors:
        raise ValidationError([(error.field_path, error.message) for error in payload.user_errors])
    return payload


@dataclass(slots=True)
class ShopifyDiscountMutator:
    """Create, update and delete basic code discounts; never retries."""

    client: GraphQLClient

    def create(self, terms: DiscountTerms) -> MutationResult:
        log.info("Creating discount %s (%s)", terms.code, terms.title)
        return self._run(
            CREATE_BASIC_CODE_DISCOUNT,
            {"basicCodeDiscount": basic_code_discount_input(terms)},
            root="discountCodeBasicCreate",
            payload_type=BasicCreatePayload,
        )

    def update(self, discount_id: str, terms: DiscountTerms) -> MutationResult:
        log.info("Updating discount %s (%s)", terms.code, discount_id)
        return self._run(
            UPDATE_BASIC_CODE_DISCOUNT,
            {"id": discount_id, "basicCodeDiscount": basic_code_discount_input(terms)},
            root="discountCodeBasicUpdate",
            payload_type=BasicCreatePayload,
        )

    def delete(self, discount_id: str) -> MutationResult:
        log.info("Deleting discount %s", discount_id)
        return self._run(
            DELETE_CODE_DISCOUNT,
            {"id": discount_id},
            root="discountCodeDelete",
            payload_type=DeletePayload,
        )

    def _run(
        self,
        document: str,
        variables: Mapping[str, object],
        *,
        root: str,
        payload_type: type[MutationPayload],
    ) -> MutationResult:
        try:
            response = self.client.graphql(document, variables)
            payload = classify_payload(response, root, payload_type)
        except DiscountSyncError as exc:
            return MutationResult.failure(str(exc))
        return MutationResult.success(_discount_id(payload))


def _discount_id(payload: MutationPayload) -> str | None:
    if isinstance(payload, BasicCreatePayload) and payload.code_discount_node is not None:
        return payload.code_discount_node.id
    if isinstance(payload, DeletePayload):
        return payload.deleted_code_discount_id
    return None
