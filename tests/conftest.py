"""Root conftest - shared fakes for the key-value store and the remote catalogs.

Invariants:
    - No test touches the network or a file on disk
    - InMemoryStore can be switched to fail reads/writes with PersistenceError
    - ScriptedFetcher answers per catalog type with records or a raised error
"""

import asyncio
import os
import random

import pytest

from splaroulette.core.domain_types import CatalogType, Locale
from splaroulette.core.errors import PersistenceError
from splaroulette.services.catalog_cache import CatalogCache
from splaroulette.services.roulette_controller import RouletteController

# Ensure tests never hit the real stat.ink API or write a database file
os.environ.setdefault("STORE_URL", "sqlite://")
os.environ.setdefault("RULE_CATALOG_URL", "http://catalog.test/rule")
os.environ.setdefault("STAGE_CATALOG_URL", "http://catalog.test/stage")
os.environ.setdefault("WEAPON_CATALOG_URL", "http://catalog.test/weapon")

RULES_RAW = [
    {"key": "area", "name": {"ja_JP": "ガチエリア", "en_US": "Splat Zones"}},
    {"key": "yagura", "name": {"ja_JP": "ガチヤグラ", "en_US": "Tower Control"}},
    {"key": "tricolor", "name": {"ja_JP": "トリカラバトル", "en_US": "Tricolor Turf War"}},
]
STAGES_RAW = [
    {"key": "yunohana", "name": {"ja_JP": "ユノハナ大渓谷"}},
    {"key": "gonzui", "name": {"ja_JP": "ゴンズイ地区"}},
    {"key": "grand_arena", "name": {"ja_JP": "グランドアリーナ"}},
]
WEAPONS_RAW = [
    {"key": "sshooter", "name": {"ja_JP": "スプラシューター"}},
    {"key": "wakaba", "name": {"ja_JP": "わかばシューター"}},
    {"key": "splatcharger", "name": {"ja_JP": "スプラチャージャー"}},
]

EXCLUSIONS = {
    CatalogType.RULE: frozenset({"tricolor"}),
    CatalogType.STAGE: frozenset({"grand_arena"}),
}


class InMemoryStore:
    """Dict-backed KeyValueStore with switchable failures."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(data or {})
        self.fail_reads = False
        self.fail_writes = False

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise PersistenceError("read denied", "read", key)
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("quota exceeded", "write", key)
        self.data[key] = value

    def remove(self, key: str) -> None:
        if self.fail_writes:
            raise PersistenceError("remove denied", "remove", key)
        self.data.pop(key, None)


class ScriptedFetcher:
    """CatalogFetcher returning canned records, or raising a scripted error."""

    def __init__(self, responses: dict[CatalogType, object] | None = None):
        self.responses: dict[CatalogType, object] = responses or {
            CatalogType.RULE: RULES_RAW,
            CatalogType.STAGE: STAGES_RAW,
            CatalogType.WEAPON: WEAPONS_RAW,
        }
        self.calls: list[CatalogType] = []

    async def fetch(self, catalog_type: CatalogType) -> list[dict]:
        self.calls.append(catalog_type)
        await asyncio.sleep(0)
        response = self.responses[catalog_type]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def fetcher():
    return ScriptedFetcher()


@pytest.fixture
def cache(store, fetcher):
    return CatalogCache(store, fetcher, EXCLUSIONS)


@pytest.fixture
def make_controller(store, fetcher):
    """Build a controller over the shared fakes; seed makes draws deterministic."""
    def _make(seed: int = 7, **kwargs) -> RouletteController:
        cache = CatalogCache(kwargs.pop("store", store), fetcher, EXCLUSIONS)
        return RouletteController(
            cache,
            cache.store,
            default_member_count=kwargs.pop("default_member_count", 4),
            max_member_count=kwargs.pop("max_member_count", 8),
            locale=kwargs.pop("locale", Locale.JA),
            rng=random.Random(seed),
        )
    return _make


@pytest.fixture
async def controller(make_controller):
    """A started controller with catalogs loaded from the scripted fetcher."""
    instance = make_controller()
    await instance.start()
    return instance
