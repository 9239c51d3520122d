"""Intent Schemas - request bodies for the user intents exposed over HTTP.

Invariants:
    - MemberCountUpdate.count >= 1 (upper bound enforced by the roster state machine)
    - MemberNameUpdate.name is stripped and at most 50 chars; empty means placeholder
"""

from pydantic import BaseModel, Field, field_validator


class InclusionUpdate(BaseModel):
    """Include or exclude one filter item, or all of them."""
    included: bool


class MemberCountUpdate(BaseModel):
    count: int = Field(ge=1)


class MemberNameUpdate(BaseModel):
    name: str = Field(max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class TeamDivisionUpdate(BaseModel):
    enabled: bool


class SectionStatesUpdate(BaseModel):
    """Section id -> expanded."""
    sections: dict[str, bool]


class FilterSectionUpdate(BaseModel):
    expanded: bool
