"""Selection State - per-catalog filter with draft/commit semantics.

Invariants:
    - committed and pending are always subsets of the current catalog's keys
    - Stale keys from a prior catalog version are dropped on initialize()
    - No stored selection means every key is selected
    - Empty committed selection means "no filter": available_items() is the full catalog
    - set_pending() on a key the catalog lacks is a no-op

Design Decisions:
    - Pure state machine: commit() returns the committed set and the shell persists it
"""

from splaroulette.core.catalog import Catalog
from splaroulette.core.domain_types import CatalogItem, CatalogType
from splaroulette.core.stageable import Stageable


class SelectionState:
    """Filter selection for one catalog type. Pure, no IO."""

    def __init__(self, catalog_type: CatalogType):
        self.catalog_type = catalog_type
        self._catalog = Catalog()
        self._stage: Stageable[frozenset[str]] = Stageable(frozenset())

    def initialize(
        self, catalog: Catalog, stored_committed: frozenset[str] | None,
    ) -> None:
        """Bind to a (new) catalog and seed committed from storage."""
        self._catalog = catalog
        if stored_committed is None:
            committed = catalog.keys
        else:
            committed = frozenset(stored_committed) & catalog.keys
        self._stage.reset(committed)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def committed(self) -> frozenset[str]:
        return self._stage.committed

    @property
    def pending(self) -> frozenset[str]:
        return self._stage.pending

    @property
    def is_dirty(self) -> bool:
        return self._stage.is_dirty

    def set_pending(self, key: str, included: bool) -> None:
        if key not in self._catalog:
            return
        if included:
            self._stage.pending = self._stage.pending | {key}
        else:
            self._stage.pending = self._stage.pending - {key}

    def select_all(self, included: bool) -> None:
        self._stage.pending = self._catalog.keys if included else frozenset()

    def commit(self) -> frozenset[str]:
        return self._stage.commit()

    def discard(self) -> None:
        self._stage.discard()

    def available_items(self) -> list[CatalogItem]:
        """Committed items in catalog order; everything when nothing is committed."""
        if not self.committed:
            return list(self._catalog.items)
        return self._catalog.filter_keys(self.committed)
