"""Random Selection - draws, Fisher-Yates shuffle and team split. Stateless.

Invariants:
    - draw_one() returns None for an empty pool, never raises
    - shuffle() never mutates its input and yields every permutation with equal probability
    - divide_teams() gives Alpha ceil(n/2) members and Bravo the rest
    - Team assignment is keyed by member index, so duplicate names cannot collide
    - run_draw() writes nothing when the pool is empty (EmptyPoolError instead)
    - Weapon draws are with replacement: members may share a weapon

Design Decisions:
    - rng parameter on every function: tests inject random.Random(seed), production
      uses the module-level generator
"""

import math
import random
from typing import Sequence, TypeVar

from splaroulette.core.domain_types import (
    CatalogItem, CatalogType, MemberIndex, ResultSlot, Team, member_slot, shared_slot,
)
from splaroulette.core.errors import EmptyPoolError

T = TypeVar("T")


def draw_one(pool: Sequence[T], rng: random.Random | None = None) -> T | None:
    """Uniformly pick one element of `pool`, or None if it is empty."""
    if not pool:
        return None
    rng = rng or random
    return pool[rng.randrange(len(pool))]


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Fisher-Yates shuffle over a copy of `items`."""
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def divide_teams(
    members: Sequence[T], rng: random.Random | None = None,
) -> tuple[list[T], list[T]]:
    """Shuffle, then split at ceil(n/2): (alpha, bravo)."""
    shuffled = shuffle(members, rng)
    alpha_size = math.ceil(len(shuffled) / 2)
    return shuffled[:alpha_size], shuffled[alpha_size:]


def assign_teams(
    member_indices: Sequence[MemberIndex], rng: random.Random | None = None,
) -> dict[MemberIndex, Team]:
    """Split member indices (never names) into Alpha and Bravo."""
    alpha, bravo = divide_teams(member_indices, rng)
    teams = {index: Team.ALPHA for index in alpha}
    teams.update({index: Team.BRAVO for index in bravo})
    return teams


def run_draw(
    catalog_type: CatalogType,
    available_items: Sequence[CatalogItem],
    member_count: int,
    rng: random.Random | None = None,
) -> dict[ResultSlot, CatalogItem]:
    """Draw one shared result (rule/stage) or one weapon per member.

    Raises EmptyPoolError before producing anything when no items are eligible.
    """
    if not available_items:
        raise EmptyPoolError(catalog_type.value)
    if catalog_type.is_shared:
        return {shared_slot(catalog_type): draw_one(available_items, rng)}
    return {
        member_slot(index, catalog_type): draw_one(available_items, rng)
        for index in range(1, member_count + 1)
    }
