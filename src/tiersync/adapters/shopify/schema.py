"""Pydantic models describing the Shopify Admin GraphQL payloads we read."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, cast

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from tiersync.domain.model import DiscountKind, DiscountRecord


class ShopifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GraphQLErrorPayload(ShopifyBaseModel):
    message: str
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None


class GraphQLResponse(ShopifyBaseModel):
    """Envelope of every GraphQL answer: ``data`` and/or top-level ``errors``."""

    data: dict[str, Any] | None = None
    errors: list[GraphQLErrorPayload] | None = None

    @property
    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors or ()]


class UserErrorPayload(ShopifyBaseModel):
    field: list[str] | str | None = None
    message: str

    @property
    def field_path(self) -> str | None:
        if self.field is None:
            return None
        if isinstance(self.field, str):
            return self.field or None
        return ".".join(self.field) or None


# discount nodes


class CodeValue(ShopifyBaseModel):
    code: str


class CodeConnection(ShopifyBaseModel):
    nodes: list[CodeValue] = Field(default_factory=list[CodeValue])


class _CodeDiscountBase(ShopifyBaseModel):
    title: str | None = None
    codes: CodeConnection = Field(default_factory=CodeConnection)

    @property
    def code_values(self) -> list[str]:
        return [value.code for value in self.codes.nodes]


class BasicCodeDiscount(_CodeDiscountBase):
    typename: Literal["DiscountCodeBasic"] = Field(alias="__typename")

    def to_records(self, node_id: str) -> list[DiscountRecord]:
        return _records(node_id, self, DiscountKind.BASIC)


class BxgyCodeDiscount(_CodeDiscountBase):
    typename: Literal["DiscountCodeBxgy"] = Field(alias="__typename")

    def to_records(self, node_id: str) -> list[DiscountRecord]:
        return _records(node_id, self, DiscountKind.BUY_X_GET_Y)


class FreeShippingCodeDiscount(_CodeDiscountBase):
    typename: Literal["DiscountCodeFreeShipping"] = Field(alias="__typename")

    def to_records(self, node_id: str) -> list[DiscountRecord]:
        return _records(node_id, self, DiscountKind.FREE_SHIPPING)


class UnknownCodeDiscount(_CodeDiscountBase):
    """Any code discount variant we do not model (app discounts, future types)."""

    typename: str | None = Field(default=None, alias="__typename")

    def to_records(self, node_id: str) -> list[DiscountRecord]:
        return _records(node_id, self, DiscountKind.UNKNOWN)


_TAGS: dict[str, str] = {
    "DiscountCodeBasic": "basic",
    "DiscountCodeBxgy": "bxgy",
    "DiscountCodeFreeShipping": "free_shipping",
}


def _discount_tag(value: object) -> str:
    if isinstance(value, Mapping):
        typename = cast(Mapping[str, object], value).get("__typename")
    else:
        typename = getattr(value, "typename", None)
    return _TAGS.get(typename, "unknown") if isinstance(typename, str) else "unknown"


CodeDiscount = Annotated[
    Annotated[BasicCodeDiscount, Tag("basic")]
    | Annotated[BxgyCodeDiscount, Tag("bxgy")]
    | Annotated[FreeShippingCodeDiscount, Tag("free_shipping")]
    | Annotated[UnknownCodeDiscount, Tag("unknown")],
    Discriminator(_discount_tag),
]


class CodeDiscountNode(ShopifyBaseModel):
    id: str
    code_discount: CodeDiscount | None = Field(default=None, alias="codeDiscount")

    def to_records(self) -> list[DiscountRecord]:
        if self.code_discount is None:
            return []
        return self.code_discount.to_records(self.id)


class CodeDiscountNodeConnection(ShopifyBaseModel):
    nodes: list[CodeDiscountNode] = Field(default_factory=list[CodeDiscountNode])


class CodeDiscountSearchData(ShopifyBaseModel):
    code_discount_nodes: CodeDiscountNodeConnection = Field(alias="codeDiscountNodes")


def _records(
    node_id: str,
    discount: _CodeDiscountBase,
    kind: DiscountKind,
) -> list[DiscountRecord]:
    return [
        DiscountRecord(id=node_id, code=code, kind=kind, title=discount.title)
        for code in discount.code_values
    ]


# mutation payloads


class MutationPayload(ShopifyBaseModel):
    user_errors: list[UserErrorPayload] = Field(
        default_factory=list[UserErrorPayload],
        alias="userErrors",
    )


class CreatedNode(ShopifyBaseModel):
    id: str


class BasicCreatePayload(MutationPayload):
    code_discount_node: CreatedNode | None = Field(default=None, alias="codeDiscountNode")


class DeletePayload(MutationPayload):
    deleted_code_discount_id: str | None = Field(default=None, alias="deletedCodeDiscountId")
