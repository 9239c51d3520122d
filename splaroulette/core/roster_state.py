"""Roster State - member count, member names and team-division toggle as a draft.

Invariants:
    - member_count is always within [1, max_member_count]
    - Dirty iff count, toggle or any name differs (an index present on one side only counts)
    - Dirty checks compare against committed.member_count, never rendered inputs
    - Names above the current count are kept, so raising the count restores them
    - A blank name displays as the localized placeholder

Design Decisions:
    - RosterValues is frozen and edits go through dataclasses.replace with a fresh
      names dict, so committed and pending never share a mutable map
"""

from dataclasses import dataclass, field, replace

from splaroulette.core.domain_types import Locale, MemberIndex
from splaroulette.core.errors import InvalidMemberCountError, InvalidMemberIndexError
from splaroulette.core.messages import member_placeholder
from splaroulette.core.stageable import Stageable


@dataclass(frozen=True)
class RosterValues:
    member_count: int = 1
    names: dict[int, str] = field(default_factory=dict)
    team_division_enabled: bool = False

    @property
    def member_indices(self) -> list[MemberIndex]:
        return [MemberIndex(i) for i in range(1, self.member_count + 1)]


class RosterState:
    """Roster draft/commit state machine. Pure, no IO."""

    def __init__(
        self,
        default_member_count: int = 4,
        max_member_count: int = 8,
        locale: Locale = Locale.JA,
    ):
        self.default_member_count = default_member_count
        self.max_member_count = max_member_count
        self.locale = locale
        self._stage: Stageable[RosterValues] = Stageable(
            RosterValues(member_count=default_member_count),
        )

    def initialize(
        self,
        stored_count: int | None,
        stored_names: dict[int, str],
        stored_team_toggle: bool,
    ) -> None:
        """Seed committed and pending from stored values, filling defaults."""
        count = stored_count
        if count is None or not 1 <= count <= self.max_member_count:
            count = self.default_member_count
        names = dict(stored_names)
        for index in range(1, count + 1):
            names.setdefault(index, member_placeholder(index, self.locale))
        self._stage.reset(RosterValues(count, names, stored_team_toggle))

    @property
    def committed(self) -> RosterValues:
        return self._stage.committed

    @property
    def pending(self) -> RosterValues:
        return self._stage.pending

    @property
    def is_dirty(self) -> bool:
        return self._stage.is_dirty

    def set_pending_count(self, count: int) -> None:
        if not 1 <= count <= self.max_member_count:
            raise InvalidMemberCountError(count, self.max_member_count)
        self._stage.pending = replace(self.pending, member_count=count)

    def set_pending_name(self, index: int, name: str) -> None:
        if not 1 <= index <= self.max_member_count:
            raise InvalidMemberIndexError(index, self.max_member_count)
        names = {**self.pending.names, index: name}
        self._stage.pending = replace(self.pending, names=names)

    def set_pending_team_toggle(self, enabled: bool) -> None:
        self._stage.pending = replace(self.pending, team_division_enabled=enabled)

    def commit(self) -> RosterValues:
        return self._stage.commit()

    def discard(self) -> None:
        self._stage.discard()

    def member_name(self, index: int, pending: bool = False) -> str:
        values = self.pending if pending else self.committed
        name = values.names.get(index, "")
        if not name.strip():
            return member_placeholder(index, self.locale)
        return name

    def member_names(self, pending: bool = False) -> dict[MemberIndex, str]:
        """Display names for every index within the (pending or committed) count."""
        values = self.pending if pending else self.committed
        return {i: self.member_name(i, pending) for i in values.member_indices}
