"""UI Preferences - collapse state of the page sections, persisted through the store.

Invariants:
    - With nothing stored, every section is expanded except controlsSection
    - The filter section defaults to expanded
"""

import json

from splaroulette.core.catalog_snapshot import (
    FILTER_SECTION_STATE_KEY, SECTION_STATES_KEY,
    filter_section_from_blob, section_states_from_blob,
)
from splaroulette.core.repository_protocols import KeyValueStore
from splaroulette.services.persistence import read_decoded, write_value

DEFAULT_SECTION_STATES: dict[str, bool] = {"controlsSection": False}


def load_section_states(store: KeyValueStore | None) -> dict[str, bool]:
    """Section id -> expanded."""
    states = read_decoded(store, SECTION_STATES_KEY, section_states_from_blob)
    if states is None:
        return dict(DEFAULT_SECTION_STATES)
    return states


def save_section_states(store: KeyValueStore | None, states: dict[str, bool]) -> bool:
    return write_value(store, SECTION_STATES_KEY, json.dumps(states))


def load_filter_section_expanded(store: KeyValueStore | None) -> bool:
    expanded = read_decoded(store, FILTER_SECTION_STATE_KEY, filter_section_from_blob)
    return True if expanded is None else expanded


def save_filter_section_expanded(store: KeyValueStore | None, expanded: bool) -> bool:
    return write_value(store, FILTER_SECTION_STATE_KEY, json.dumps(expanded))
