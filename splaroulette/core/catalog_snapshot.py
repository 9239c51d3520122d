"""Catalog Snapshot - serialization between domain values and stored strings.

Invariants:
    - Every store value is a string; JSON for catalogs, selections and preferences
    - Decoders raise ValueError on malformed input; callers decide "absent"
    - Decoded selections carry only string keys, never None entries
    - Roster fields use the flat keys memberCount, memberName<i>, teamDivisionToggle

Design Decisions:
    - Store key names kept identical to the browser build so an exported
      localStorage dump can be imported unchanged
"""

import json

from splaroulette.core.catalog import Catalog, parse_catalog
from splaroulette.core.domain_types import CatalogType

# Store keys
CATALOG_KEYS: dict[CatalogType, str] = {
    CatalogType.RULE: "spla-rules",
    CatalogType.STAGE: "spla-stages",
    CatalogType.WEAPON: "spla-weapons",
}
SELECTED_ITEMS_KEY = "spla-selected-items"
SECTION_STATES_KEY = "spla-section-states"
FILTER_SECTION_STATE_KEY = "spla-filter-section-state"
MEMBER_COUNT_KEY = "memberCount"
TEAM_DIVISION_KEY = "teamDivisionToggle"


def member_name_key(index: int) -> str:
    return f"memberName{index}"


# ─── Catalogs ────────────────────────────────────────────────────

def catalog_to_blob(catalog: Catalog) -> str:
    return json.dumps(
        [item.to_dict() for item in catalog.items], ensure_ascii=False,
    )


def catalog_from_blob(blob: str | None) -> Catalog:
    """Decode a cached catalog. Empty or missing blobs are malformed too."""
    if not blob:
        raise ValueError("empty catalog blob")
    catalog = parse_catalog(json.loads(blob))
    if not len(catalog):
        raise ValueError("cached catalog has no items")
    return catalog


# ─── Selections ──────────────────────────────────────────────────

def selections_to_blob(selections: dict[CatalogType, frozenset[str]]) -> str:
    return json.dumps(
        {t.value: sorted(keys) for t, keys in selections.items()},
        ensure_ascii=False,
    )


def selections_from_blob(blob: str) -> dict[CatalogType, frozenset[str]]:
    """Decode the stored selection map.

    Types missing from the blob are missing from the result (no prior
    selection for that type).
    """
    data = json.loads(blob)
    if not isinstance(data, dict):
        raise ValueError("selection blob must be an object")
    result: dict[CatalogType, frozenset[str]] = {}
    for catalog_type in CatalogType:
        keys = data.get(catalog_type.value)
        if isinstance(keys, list):
            result[catalog_type] = frozenset(k for k in keys if isinstance(k, str))
    return result


# ─── Roster fields ───────────────────────────────────────────────

def parse_member_count(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_toggle(raw: str | None) -> bool:
    return raw == "true"


def toggle_to_str(value: bool) -> str:
    return "true" if value else "false"


# ─── UI preferences ──────────────────────────────────────────────

def section_states_from_blob(blob: str) -> dict[str, bool]:
    data = json.loads(blob)
    if not isinstance(data, dict):
        raise ValueError("section states must be an object")
    return {str(k): bool(v) for k, v in data.items()}


def filter_section_from_blob(blob: str) -> bool:
    value = json.loads(blob)
    if not isinstance(value, bool):
        raise ValueError("filter section state must be a boolean")
    return value
