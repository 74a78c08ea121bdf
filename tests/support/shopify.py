"""In-memory Shopify shop answering the GraphQL documents the adapter sends."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING, Any

from tiersync.adapters.shopify.schema import GraphQLResponse
from tiersync.domain.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Mapping

BASIC = "DiscountCodeBasic"
BXGY = "DiscountCodeBxgy"
FREE_SHIPPING = "DiscountCodeFreeShipping"
APP = "DiscountCodeApp"


@dataclass(slots=True)
class StoredDiscount:
    id: str
    typename: str
    codes: list[str]
    title: str = ""
    input: dict[str, Any] = field(default_factory=dict[str, Any])

    def node(self) -> dict[str, object]:
        return {
            "id": self.id,
            "codeDiscount": {
                "__typename": self.typename,
                "title": self.title,
                "codes": {"nodes": [{"code": code} for code in self.codes]},
            },
        }


@dataclass(slots=True)
class Call:
    operation: str
    variables: dict[str, Any]


@dataclass
class FakeShop:
    """Answers lookups and basic-discount mutations against a dict of discounts.

    ``scoped_search_misses`` makes ``code:<code>`` searches return nothing, the way
    the platform index sometimes does. ``forced_user_errors`` / ``forced_errors``
    inject failures per mutation root field; ``transport_failures`` raises for a root.
    """

    discounts: dict[str, StoredDiscount] = field(default_factory=dict[str, StoredDiscount])
    scoped_search_misses: bool = False
    forced_user_errors: dict[str, list[dict[str, object]]] = field(
        default_factory=dict[str, list[dict[str, object]]]
    )
    forced_errors: dict[str, list[str]] = field(default_factory=dict[str, list[str]])
    transport_failures: set[str] = field(default_factory=set[str])
    calls: list[Call] = field(default_factory=list[Call])
    _ids: count[int] = field(default_factory=lambda: count(1000))

    def add(self, typename: str, *codes: str, title: str = "") -> StoredDiscount:
        discount = StoredDiscount(
            id=f"gid://shopify/DiscountCodeNode/{next(self._ids)}",
            typename=typename,
            codes=list(codes),
            title=title,
        )
        self.discounts[discount.id] = discount
        return discount

    def codes(self) -> set[str]:
        return {code for discount in self.discounts.values() for code in discount.codes}

    def operations(self, name: str | None = None) -> list[Call]:
        return [call for call in self.calls if name is None or call.operation == name]

    def mutations(self) -> list[Call]:
        return [call for call in self.calls if call.operation != "codeDiscountNodes"]

    # GraphQLClient

    def graphql(
        self,
        query: str,
        variables: Mapping[str, object] | None = None,
    ) -> GraphQLResponse:
        operation = _operation(query)
        payload = dict(variables or {})
        self.calls.append(Call(operation=operation, variables=payload))

        if operation in self.transport_failures:
            raise TransportError("HTTP 502 Bad Gateway", status_code=502)
        if operation in self.forced_errors:
            return _response(
                errors=[{"message": message} for message in self.forced_errors[operation]]
            )
        if operation == "codeDiscountNodes":
            return self._search(str(payload["query"]))
        if operation in self.forced_user_errors:
            return _response(data={operation: {"userErrors": self.forced_user_errors[operation]}})
        if operation == "discountCodeBasicCreate":
            return self._create(payload["basicCodeDiscount"])
        if operation == "discountCodeBasicUpdate":
            return self._update(str(payload["id"]), payload["basicCodeDiscount"])
        if operation == "discountCodeDelete":
            return self._delete(str(payload["id"]))
        raise AssertionError(f"unexpected document: {query}")

    def _search(self, query: str) -> GraphQLResponse:
        if query.startswith("code:"):
            wanted = query.removeprefix("code:").casefold()
            hits = (
                []
                if self.scoped_search_misses
                else [d for d in self.discounts.values() if wanted in _folded(d.codes)]
            )
        else:
            # bare terms match loosely, like a tokenized full-text index
            needle = query.casefold()
            hits = [
                d for d in self.discounts.values() if any(needle in c for c in _folded(d.codes))
            ]
        return _response(data={"codeDiscountNodes": {"nodes": [d.node() for d in hits]}})

    def _create(self, basic: dict[str, Any]) -> GraphQLResponse:
        code = basic["code"]
        if code.casefold() in _folded(self.codes()):
            return _user_errors(
                "discountCodeBasicCreate",
                [{"field": ["basicCodeDiscount", "code"], "message": "Code must be unique."}],
            )
        discount = self.add(BASIC, code, title=basic["title"])
        discount.input = basic
        return _response(
            data={
                "discountCodeBasicCreate": {
                    "codeDiscountNode": {"id": discount.id},
                    "userErrors": [],
                }
            }
        )

    def _update(self, discount_id: str, basic: dict[str, Any]) -> GraphQLResponse:
        discount = self.discounts.get(discount_id)
        if discount is None:
            return _user_errors(
                "discountCodeBasicUpdate",
                [{"field": ["id"], "message": "Discount does not exist"}],
            )
        discount.input = basic
        discount.title = basic["title"]
        return _response(
            data={
                "discountCodeBasicUpdate": {
                    "codeDiscountNode": {"id": discount.id},
                    "userErrors": [],
                }
            }
        )

    def _delete(self, discount_id: str) -> GraphQLResponse:
        if self.discounts.pop(discount_id, None) is None:
            return _user_errors(
                "discountCodeDelete",
                [{"field": ["id"], "message": "Discount does not exist"}],
            )
        return _response(
            data={"discountCodeDelete": {"deletedCodeDiscountId": discount_id, "userErrors": []}}
        )


def _operation(query: str) -> str:
    for name in (
        "codeDiscountNodes",
        "discountCodeBasicCreate",
        "discountCodeBasicUpdate",
        "discountCodeDelete",
    ):
        if f"{name}(" in query:
            return name
    raise AssertionError(f"unknown document: {query}")


def _folded(codes: list[str] | set[str]) -> set[str]:
    return {code.casefold() for code in codes}


def _response(
    *,
    data: dict[str, object] | None = None,
    errors: list[dict[str, object]] | None = None,
) -> GraphQLResponse:
    return GraphQLResponse.model_validate({"data": data, "errors": errors})


def _user_errors(root: str, errors: list[dict[str, object]]) -> GraphQLResponse:
    return _response(data={root: {"userErrors": errors}})
