"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - KeyValueStore is synchronous: store access is never a suspension point.
      CatalogFetcher is async: the remote fetch is the only one
"""

from typing import Protocol

from splaroulette.core.domain_types import CatalogType


class KeyValueStore(Protocol):
    """Durable string-keyed storage. Implementations may raise PersistenceError."""
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class CatalogFetcher(Protocol):
    """Remote catalog source. Raises FetchError on any non-success outcome."""
    async def fetch(self, catalog_type: CatalogType) -> list[dict]: ...
