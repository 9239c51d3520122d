"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - CatalogType, Team and Locale are the only valid category/team/locale values
    - CatalogItem is immutable once built; catalogs are replaced, never patched
    - Result slots are "common-rule", "common-stage" and "<memberIndex>-weapon"

Design Decisions:
    - str Enums: serialize to JSON and store keys without custom encoders
    - NewType for member indices: 1-based, never confused with list positions
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType

# ─── Identity Types ──────────────────────────────────────────────

MemberIndex = NewType("MemberIndex", int)   # 1-based
ResultSlot = NewType("ResultSlot", str)


# ─── Enums ───────────────────────────────────────────────────────

class CatalogType(str, Enum):
    """The three catalogs a draw can come from."""
    RULE = "rule"
    STAGE = "stage"
    WEAPON = "weapon"

    @property
    def is_shared(self) -> bool:
        """Rule and stage draw one result for the whole group."""
        return self is not CatalogType.WEAPON


class Team(str, Enum):
    ALPHA = "alpha"
    BRAVO = "bravo"


class Locale(str, Enum):
    """Locales for user-facing text and item display names."""
    JA = "ja"
    EN = "en"


# ─── Catalog entries ─────────────────────────────────────────────

@dataclass(frozen=True)
class CatalogItem:
    """One selectable entry. `name` is a plain string or a locale map."""
    key: str
    name: str | dict[str, str] | None = None

    def to_dict(self) -> dict:
        return {"key": self.key, "name": self.name}


# ─── Result slots ────────────────────────────────────────────────

def shared_slot(catalog_type: CatalogType) -> ResultSlot:
    return ResultSlot(f"common-{catalog_type.value}")


def member_slot(index: int, catalog_type: CatalogType) -> ResultSlot:
    return ResultSlot(f"{index}-{catalog_type.value}")
