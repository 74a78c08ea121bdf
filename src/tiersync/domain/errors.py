"""Failure taxonomy for talking to the discount platform."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .model import DiscountKind


class DiscountSyncError(RuntimeError):
    """Base class for discount lookup and mutation failures."""


class TransportError(DiscountSyncError):
    """Raised when the platform could not be reached or answered with a non-2xx status."""

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(f"transport: {detail}")
        self.status_code = status_code


class GraphError(DiscountSyncError):
    """Raised when the response carries a top-level ``errors`` payload."""

    def __init__(self, messages: Sequence[str]) -> None:
        first = messages[0] if messages else "unknown GraphQL error"
        super().__init__(first)
        self.messages = tuple(messages)


class ValidationError(DiscountSyncError):
    """Raised for field-level ``userErrors`` rejections."""

    def __init__(self, problems: Sequence[tuple[str | None, str]]) -> None:
        super().__init__(
            ", ".join(f"{field}: {message}" if field else message for field, message in problems)
        )
        self.problems = tuple(problems)


class IncompatibleKindError(DiscountSyncError):
    """Raised when a code exists but belongs to a discount kind this system does not manage."""

    def __init__(self, code: str, kind: DiscountKind) -> None:
        super().__init__(
            f"Discount code {code} already exists with incompatible discount type {kind}"
        )
        self.code = code
        self.kind = kind
