"""Catalog Cache - resolves the three catalogs from the store or the remote source.

Invariants:
    - load() returns cached catalogs only when all three blobs are present and well-formed
    - refresh() fetches all three concurrently; any failure fails the whole refresh
      and nothing is cached (all-or-nothing join)
    - Exclusions apply to rule and stage only
    - Persisting the refreshed catalogs is best-effort (logged, never raised)
    - Only one refresh runs at a time; an overlapping call raises RefreshInProgressError
    - manual_refresh() clears the three catalog blobs and the selection blob first
"""

import asyncio
import logging

from splaroulette.core.catalog import Catalog, CatalogSet, apply_exclusions, parse_catalog
from splaroulette.core.catalog_snapshot import (
    CATALOG_KEYS, SELECTED_ITEMS_KEY, catalog_from_blob, catalog_to_blob,
)
from splaroulette.core.domain_types import CatalogType
from splaroulette.core.errors import FetchError, RefreshInProgressError
from splaroulette.core.repository_protocols import CatalogFetcher, KeyValueStore
from splaroulette.services.persistence import read_decoded, remove_value, write_value

logger = logging.getLogger(__name__)


class CatalogCache:
    """Load-or-fetch access to the rule, stage and weapon catalogs."""

    def __init__(
        self,
        store: KeyValueStore | None,
        fetcher: CatalogFetcher,
        exclusions: dict[CatalogType, frozenset[str]] | None = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.exclusions = exclusions or {}
        self._refreshing = False

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    def read_cached(self) -> CatalogSet | None:
        """All three cached catalogs, or None if any is missing or malformed."""
        catalogs: dict[CatalogType, Catalog] = {}
        for catalog_type, key in CATALOG_KEYS.items():
            catalog = read_decoded(self.store, key, catalog_from_blob)
            if catalog is None:
                return None
            catalogs[catalog_type] = catalog
        return CatalogSet.from_mapping(catalogs)

    async def load(self) -> CatalogSet:
        cached = self.read_cached()
        if cached is not None:
            logger.info("Catalogs loaded from cache")
            return cached
        logger.info("Catalog cache incomplete, fetching from remote")
        return await self.refresh()

    async def refresh(self) -> CatalogSet:
        if self._refreshing:
            raise RefreshInProgressError()
        self._refreshing = True
        try:
            return await self._fetch_and_cache()
        finally:
            self._refreshing = False

    async def manual_refresh(self) -> CatalogSet:
        """User-initiated refresh: drop cached catalogs and selections, then fetch."""
        if self._refreshing:
            raise RefreshInProgressError()
        self.clear()
        return await self.refresh()

    def clear(self) -> None:
        for key in CATALOG_KEYS.values():
            remove_value(self.store, key)
        remove_value(self.store, SELECTED_ITEMS_KEY)

    async def _fetch_and_cache(self) -> CatalogSet:
        types = list(CatalogType)
        raw_results = await asyncio.gather(
            *(self.fetcher.fetch(t) for t in types),
        )
        catalogs = {
            t: _parse_fetched(t, raw) for t, raw in zip(types, raw_results)
        }
        catalogs = apply_exclusions(catalogs, self.exclusions)
        for catalog_type, catalog in catalogs.items():
            write_value(self.store, CATALOG_KEYS[catalog_type], catalog_to_blob(catalog))
        logger.info(
            "Catalogs refreshed: "
            + ", ".join(f"{t.value}={len(c)}" for t, c in catalogs.items()),
        )
        return CatalogSet.from_mapping(catalogs)


def _parse_fetched(catalog_type: CatalogType, raw: list[dict]) -> Catalog:
    try:
        return parse_catalog(raw)
    except ValueError as e:
        raise FetchError(catalog_type.value, None, f"malformed records: {e}")
