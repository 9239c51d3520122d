"""Catalog - ordered, key-unique item lists for the three catalog types.

Invariants:
    - Keys are unique within a catalog (first occurrence wins on parse)
    - A Catalog is never mutated; refresh builds a new one
    - Exclusions apply to rule and stage only; weapons pass through unfiltered
"""

from dataclasses import dataclass, field

from splaroulette.core.domain_types import CatalogItem, CatalogType

FILTERED_TYPES: tuple[CatalogType, ...] = (CatalogType.RULE, CatalogType.STAGE)


@dataclass(frozen=True)
class Catalog:
    items: tuple[CatalogItem, ...] = ()

    @property
    def keys(self) -> frozenset[str]:
        return frozenset(item.key for item in self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, key: object) -> bool:
        return key in self.keys

    def filter_keys(self, keys: frozenset[str]) -> list[CatalogItem]:
        """Items whose key is in `keys`, in catalog order."""
        return [item for item in self.items if item.key in keys]

    def without(self, excluded: frozenset[str]) -> "Catalog":
        return Catalog(tuple(i for i in self.items if i.key not in excluded))


@dataclass(frozen=True)
class CatalogSet:
    """The three catalogs, resolved together."""
    rules: Catalog = field(default_factory=Catalog)
    stages: Catalog = field(default_factory=Catalog)
    weapons: Catalog = field(default_factory=Catalog)

    def get(self, catalog_type: CatalogType) -> Catalog:
        return {
            CatalogType.RULE: self.rules,
            CatalogType.STAGE: self.stages,
            CatalogType.WEAPON: self.weapons,
        }[catalog_type]

    @property
    def is_complete(self) -> bool:
        """All three catalogs are non-empty."""
        return all(len(self.get(t)) > 0 for t in CatalogType)

    @classmethod
    def from_mapping(cls, catalogs: dict[CatalogType, Catalog]) -> "CatalogSet":
        return cls(
            rules=catalogs[CatalogType.RULE],
            stages=catalogs[CatalogType.STAGE],
            weapons=catalogs[CatalogType.WEAPON],
        )


def parse_catalog(raw: object) -> Catalog:
    """Build a Catalog from decoded JSON records. Pure, no IO.

    Raises ValueError when `raw` is not a list of objects with a string `key`.
    """
    if not isinstance(raw, list):
        raise ValueError(f"catalog must be a list, got {type(raw).__name__}")
    seen: set[str] = set()
    items: list[CatalogItem] = []
    for record in raw:
        if not isinstance(record, dict):
            raise ValueError("catalog record must be an object")
        key = record.get("key")
        if not isinstance(key, str) or not key:
            raise ValueError("catalog record has no string key")
        if key in seen:
            continue
        seen.add(key)
        items.append(CatalogItem(key=key, name=_parse_name(record.get("name"))))
    return Catalog(tuple(items))


def _parse_name(raw: object) -> str | dict[str, str] | None:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        return {k: v for k, v in raw.items() if isinstance(v, str)}
    return None


def apply_exclusions(
    catalogs: dict[CatalogType, Catalog],
    exclusions: dict[CatalogType, frozenset[str]],
) -> dict[CatalogType, Catalog]:
    """Drop excluded keys from rule and stage catalogs. Weapons untouched."""
    result = dict(catalogs)
    for catalog_type in FILTERED_TYPES:
        excluded = exclusions.get(catalog_type, frozenset())
        if excluded and catalog_type in result:
            result[catalog_type] = result[catalog_type].without(excluded)
    return result
