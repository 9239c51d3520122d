"""State Schemas - the read model every route returns.

Invariants:
    - Mirrors RouletteController.view() one-to-one
    - Catalog-type keys serialize as "rule" / "stage" / "weapon"
    - results keys are result slots ("common-rule", "2-weapon", ...)
"""

from pydantic import BaseModel

from splaroulette.core.domain_types import CatalogType, Team


class CatalogEntryView(BaseModel):
    key: str
    name: str
    pending: bool
    committed: bool


class FilterStatusView(BaseModel):
    dirty: bool
    selected_count: int
    available_count: int


class RosterValuesView(BaseModel):
    member_count: int
    names: dict[int, str]
    team_division_enabled: bool


class RosterView(BaseModel):
    committed: RosterValuesView
    pending: RosterValuesView
    dirty: bool


class DrawnItemView(BaseModel):
    key: str
    name: str


class TeamView(BaseModel):
    team: Team
    label: str


class StateView(BaseModel):
    status_message: str | None = None
    is_refreshing: bool = False
    catalogs: dict[CatalogType, list[CatalogEntryView]]
    filters: dict[CatalogType, FilterStatusView]
    roster: RosterView
    results: dict[str, DrawnItemView]
    teams: dict[int, TeamView]


class PreferencesView(BaseModel):
    sections: dict[str, bool]
    filter_section_expanded: bool
