"""Roulette Controller - owns the application state and handles every user intent.

Invariants:
    - The controller is the only owner of catalogs, selections, roster, results and teams
    - Draws use committed filters and the committed member count, never pending edits
    - Results are cleared on catalog (re)load, filter apply and roster confirm
    - Team assignment is re-derived on roster confirm when the toggle is on,
      cleared when it is off
    - Committed changes are written to the store; store failures never abort an intent
    - Listeners are notified with the fresh view after every state change; a
      failing listener is logged and never undoes or fails the intent
    - Applying filters before catalogs load never overwrites the stored
      selection of a type that has no catalog in memory

Design Decisions:
    - Explicit intent methods instead of UI callbacks: any front end (HTTP, CLI,
      tests) drives the same object
    - Fetch failures set a localized status message and propagate; the caller
      keeps rendering whatever catalogs are still in memory
"""

import logging
import random
from typing import Callable

from splaroulette.config import Settings
from splaroulette.core.catalog import CatalogSet
from splaroulette.core.catalog_snapshot import (
    MEMBER_COUNT_KEY, SELECTED_ITEMS_KEY, TEAM_DIVISION_KEY,
    member_name_key, parse_member_count, parse_toggle,
    selections_from_blob, selections_to_blob, toggle_to_str,
)
from splaroulette.core.domain_types import (
    CatalogItem, CatalogType, Locale, MemberIndex, ResultSlot, Team,
)
from splaroulette.core.errors import EmptyPoolError, FetchError, TeamDivisionDisabledError
from splaroulette.core.messages import (
    display_name, empty_pool_message, load_failed_message,
    refresh_failed_message, team_name,
)
from splaroulette.core.random_selection import assign_teams, run_draw
from splaroulette.core.repository_protocols import CatalogFetcher, KeyValueStore
from splaroulette.core.roster_state import RosterState, RosterValues
from splaroulette.core.selection_state import SelectionState
from splaroulette.services import ui_preferences
from splaroulette.services.catalog_cache import CatalogCache
from splaroulette.services.persistence import read_decoded, read_value, write_value

logger = logging.getLogger(__name__)

Listener = Callable[[dict], None]


class RouletteController:
    """Single-session application state plus its intent handlers."""

    def __init__(
        self,
        cache: CatalogCache,
        store: KeyValueStore | None,
        *,
        default_member_count: int = 4,
        max_member_count: int = 8,
        locale: Locale = Locale.JA,
        rng: random.Random | None = None,
    ):
        self.cache = cache
        self.store = store
        self.locale = locale
        self.rng = rng
        self.catalogs = CatalogSet()
        self.selections = {t: SelectionState(t) for t in CatalogType}
        self.roster = RosterState(default_member_count, max_member_count, locale)
        self.results: dict[ResultSlot, CatalogItem] = {}
        self.teams: dict[MemberIndex, Team] = {}
        self.status_message: str | None = None
        self._listeners: list[Listener] = []

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: KeyValueStore | None,
        fetcher: CatalogFetcher,
        rng: random.Random | None = None,
    ) -> "RouletteController":
        cache = CatalogCache(store, fetcher, settings.exclusions)
        return cls(
            cache, store,
            default_member_count=settings.default_member_count,
            max_member_count=settings.max_member_count,
            locale=settings.locale,
            rng=rng,
        )

    # --- Observers -------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> dict:
        view = self.view()
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                logger.exception(f"Change listener {listener!r} failed")
        return view

    # --- Startup ---------------------------------------------------------------

    async def start(self) -> bool:
        """Seed roster, load catalogs, restore selections and teams.

        Returns False (with a status message) when catalogs could not be loaded.
        """
        self._restore_roster()
        if self.roster.committed.team_division_enabled:
            self._divide_teams()
        try:
            catalogs = await self.cache.load()
        except FetchError as e:
            logger.error(
                f"Initial catalog load failed: {e.message}",
                extra={"resource": e.resource, "status_code": e.status},
            )
            self.status_message = load_failed_message(self.locale)
            self._changed()
            return False
        self._apply_catalogs(catalogs)
        self._changed()
        return True

    def _restore_roster(self) -> None:
        count = parse_member_count(read_value(self.store, MEMBER_COUNT_KEY))
        names: dict[int, str] = {}
        for index in range(1, self.roster.max_member_count + 1):
            name = read_value(self.store, member_name_key(index))
            if name is not None:
                names[index] = name
        toggle = parse_toggle(read_value(self.store, TEAM_DIVISION_KEY))
        self.roster.initialize(count, names, toggle)

    def _apply_catalogs(self, catalogs: CatalogSet) -> None:
        stored = read_decoded(self.store, SELECTED_ITEMS_KEY, selections_from_blob) or {}
        self.catalogs = catalogs
        for catalog_type, selection in self.selections.items():
            selection.initialize(catalogs.get(catalog_type), stored.get(catalog_type))
        self.results = {}

    # --- Catalog refresh -------------------------------------------------------

    async def refresh_catalogs(self) -> dict:
        """Manual refresh. Prior in-memory catalogs stay usable if it fails."""
        try:
            catalogs = await self.cache.manual_refresh()
        except FetchError as e:
            logger.error(
                f"Catalog refresh failed: {e.message}",
                extra={"resource": e.resource, "status_code": e.status},
            )
            self.status_message = refresh_failed_message(self.locale)
            e.context.user_message = self.status_message
            self._changed()
            raise
        self.status_message = None
        self._apply_catalogs(catalogs)
        return self._changed()

    # --- Filters ---------------------------------------------------------------

    def toggle_filter_item(self, catalog_type: CatalogType, key: str, included: bool) -> dict:
        self.selections[catalog_type].set_pending(key, included)
        return self._changed()

    def select_all(self, catalog_type: CatalogType, included: bool) -> dict:
        self.selections[catalog_type].select_all(included)
        return self._changed()

    def apply_filters(self, catalog_type: CatalogType | None = None) -> dict:
        """Commit pending filter edits (one type, or all) and persist them."""
        for selection in self._selections_for(catalog_type):
            selection.commit()
        write_value(
            self.store, SELECTED_ITEMS_KEY, selections_to_blob(self._selection_snapshot()),
        )
        self.results = {}
        logger.info("Filters applied", extra={"catalog_type": _type_value(catalog_type)})
        return self._changed()

    def discard_filters(self, catalog_type: CatalogType | None = None) -> dict:
        for selection in self._selections_for(catalog_type):
            selection.discard()
        return self._changed()

    def _selection_snapshot(self) -> dict[CatalogType, frozenset[str]]:
        """Committed keys per loaded type; types with no catalog keep their stored keys."""
        snapshot = read_decoded(self.store, SELECTED_ITEMS_KEY, selections_from_blob) or {}
        for catalog_type, selection in self.selections.items():
            if len(selection.catalog):
                snapshot[catalog_type] = selection.committed
        return snapshot

    def _selections_for(self, catalog_type: CatalogType | None) -> list[SelectionState]:
        if catalog_type is None:
            return list(self.selections.values())
        return [self.selections[catalog_type]]

    # --- Roster ----------------------------------------------------------------

    def set_member_count(self, count: int) -> dict:
        self.roster.set_pending_count(count)
        return self._changed()

    def set_member_name(self, index: int, name: str) -> dict:
        self.roster.set_pending_name(index, name)
        return self._changed()

    def set_team_division(self, enabled: bool) -> dict:
        self.roster.set_pending_team_toggle(enabled)
        return self._changed()

    def confirm_roster(self) -> dict:
        values = self.roster.commit()
        self._persist_roster(values)
        if values.team_division_enabled:
            self._divide_teams()
        else:
            self.teams = {}
        self.results = {}
        logger.info("Roster confirmed", extra={"member_count": values.member_count})
        return self._changed()

    def discard_roster(self) -> dict:
        self.roster.discard()
        return self._changed()

    def shuffle_teams(self) -> dict:
        """Re-run team division over the committed roster."""
        if not self.roster.committed.team_division_enabled:
            raise TeamDivisionDisabledError()
        self._divide_teams()
        return self._changed()

    def _divide_teams(self) -> None:
        self.teams = assign_teams(self.roster.committed.member_indices, self.rng)

    def _persist_roster(self, values: RosterValues) -> None:
        write_value(self.store, MEMBER_COUNT_KEY, str(values.member_count))
        for index, name in values.names.items():
            write_value(self.store, member_name_key(index), name)
        write_value(
            self.store, TEAM_DIVISION_KEY, toggle_to_str(values.team_division_enabled),
        )

    # --- Draws -----------------------------------------------------------------

    def draw(self, catalog_type: CatalogType) -> dict:
        self.results.update(self._draw_results(catalog_type))
        return self._changed()

    def draw_all(self) -> dict:
        """Draw every type. Refused as a whole if any pool is empty."""
        for catalog_type in CatalogType:
            if not self.selections[catalog_type].available_items():
                raise self._empty_pool(catalog_type)
        drawn: dict[ResultSlot, CatalogItem] = {}
        for catalog_type in CatalogType:
            drawn.update(self._draw_results(catalog_type))
        self.results.update(drawn)
        return self._changed()

    def _draw_results(self, catalog_type: CatalogType) -> dict[ResultSlot, CatalogItem]:
        try:
            drawn = run_draw(
                catalog_type,
                self.selections[catalog_type].available_items(),
                self.roster.committed.member_count,
                self.rng,
            )
        except EmptyPoolError:
            raise self._empty_pool(catalog_type)
        logger.debug(
            f"Drew {len(drawn)} result(s)", extra={"catalog_type": catalog_type.value},
        )
        return drawn

    def _empty_pool(self, catalog_type: CatalogType) -> EmptyPoolError:
        error = EmptyPoolError(catalog_type.value)
        error.context.user_message = empty_pool_message(catalog_type, self.locale)
        return error

    # --- Preferences -----------------------------------------------------------

    def preferences(self) -> dict:
        return {
            "sections": ui_preferences.load_section_states(self.store),
            "filter_section_expanded": ui_preferences.load_filter_section_expanded(self.store),
        }

    def save_section_states(self, states: dict[str, bool]) -> dict:
        ui_preferences.save_section_states(self.store, states)
        return self.preferences()

    def save_filter_section(self, expanded: bool) -> dict:
        ui_preferences.save_filter_section_expanded(self.store, expanded)
        return self.preferences()

    # --- Read model ------------------------------------------------------------

    def view(self) -> dict:
        return {
            "status_message": self.status_message,
            "is_refreshing": self.cache.is_refreshing,
            "catalogs": {t.value: self._catalog_view(t) for t in CatalogType},
            "filters": {
                t.value: {
                    "dirty": s.is_dirty,
                    "selected_count": len(s.pending),
                    "available_count": len(s.available_items()),
                }
                for t, s in self.selections.items()
            },
            "roster": {
                "committed": self._roster_view(pending=False),
                "pending": self._roster_view(pending=True),
                "dirty": self.roster.is_dirty,
            },
            "results": {
                slot: {"key": item.key, "name": display_name(item, self.locale)}
                for slot, item in self.results.items()
            },
            "teams": {
                index: {"team": team.value, "label": team_name(team, self.locale)}
                for index, team in sorted(self.teams.items())
            },
        }

    def _catalog_view(self, catalog_type: CatalogType) -> list[dict]:
        selection = self.selections[catalog_type]
        return [
            {
                "key": item.key,
                "name": display_name(item, self.locale),
                "pending": item.key in selection.pending,
                "committed": item.key in selection.committed,
            }
            for item in selection.catalog.items
        ]

    def _roster_view(self, pending: bool) -> dict:
        values = self.roster.pending if pending else self.roster.committed
        return {
            "member_count": values.member_count,
            "names": self.roster.member_names(pending),
            "team_division_enabled": values.team_division_enabled,
        }


def _type_value(catalog_type: CatalogType | None) -> str | None:
    return catalog_type.value if catalog_type else None
