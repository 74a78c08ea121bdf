"""Port for the key/value store holding bundle configuration blobs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfigStore(Protocol):
    def get(self, namespace: str, key: str) -> object | None:
        """Return the decoded JSON value stored under ``namespace``/``key``, if any."""
        ...

    def set(self, namespace: str, key: str, value: object) -> bool:
        """Store ``value`` as JSON and report whether the write was accepted."""
        ...
