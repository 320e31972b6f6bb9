"""Ledger Schemas — tagged mutation requests and ledger read models.

Invariants:
    - MutationRequest is a discriminated union on `kind`; each variant maps
      1:1 onto a core mutation dataclass via to_mutation()
    - Slot, count and date-key rules are enforced by the core so a bad value
      yields the same typed error whether it arrives over HTTP or not
    - Slot and count fields are strict ints: JSON booleans and numeric strings
      are rejected before they can be read as 0 or 1
    - Response vectors are plain int lists (0 unset, 1 attended, 2 no-show)

Design Decisions:
    - Literal `kind` + Field(discriminator=...) over a free-form payload dict:
      pydantic rejects unknown kinds and missing fields before the service runs
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, StrictInt

from club_ledger.core.domain_types import RecordKey, Track
from club_ledger.core.mutations import (
    ClearMonth, DeleteMember, MoveSession, Mutation, ResetDay,
    SetDailyMetadata, Toggle,
)


# --- Mutation requests --------------------------------------------------------

class ToggleRequest(BaseModel):
    kind: Literal["toggle"]
    date_key: str
    member_id: str = Field(min_length=1)
    slot: StrictInt
    track: Track = Track.OFFLINE

    def to_mutation(self) -> Mutation:
        return Toggle(self.date_key, self.member_id, self.slot, self.track)


class ResetDayRequest(BaseModel):
    kind: Literal["reset_day"]
    date_key: str
    track: Track = Track.OFFLINE

    def to_mutation(self) -> Mutation:
        return ResetDay(self.date_key, self.track)


class ClearMonthRequest(BaseModel):
    """Clear one track's month, or both tracks when track is null."""
    kind: Literal["clear_month"]
    year: int = Field(ge=1, le=9999)
    month: int
    track: Track | None = Track.OFFLINE

    def to_mutation(self) -> Mutation:
        return ClearMonth(self.year, self.month, self.track)


class SetDailyMetadataRequest(BaseModel):
    kind: Literal["set_metadata"]
    date_key: str
    names: list[str] = Field(default_factory=list)
    hosts: list[str] = Field(default_factory=list)
    session_count: StrictInt
    track: Track = Track.OFFLINE

    def to_mutation(self) -> Mutation:
        return SetDailyMetadata(
            self.date_key, tuple(self.names), tuple(self.hosts),
            self.session_count, self.track,
        )


class MoveSessionRequest(BaseModel):
    kind: Literal["move_session"]
    source_date: str
    source_slot: StrictInt
    target_date: str
    target_slot: StrictInt
    track: Track = Track.OFFLINE

    def to_mutation(self) -> Mutation:
        return MoveSession(
            self.source_date, self.source_slot,
            self.target_date, self.target_slot, self.track,
        )


class DeleteMemberRequest(BaseModel):
    kind: Literal["delete_member"]
    member_id: str = Field(min_length=1)

    def to_mutation(self) -> Mutation:
        return DeleteMember(self.member_id)


MutationRequest = Annotated[
    Union[
        ToggleRequest, ResetDayRequest, ClearMonthRequest,
        SetDailyMetadataRequest, MoveSessionRequest, DeleteMemberRequest,
    ],
    Field(discriminator="kind"),
]


class MutationResponse(BaseModel):
    """Outcome of one mutation plus the current value of every record it touches."""
    applied: bool
    reason: str | None = None
    changed_records: list[RecordKey] = Field(default_factory=list)
    versions: dict[str, int] = Field(default_factory=dict)
    records: dict[str, Any] = Field(default_factory=dict)


# --- Read models --------------------------------------------------------------

class TrackDay(BaseModel):
    """One track on one date: resolved metadata and every stored vector."""
    session_names: list[str]
    session_hosts: list[str]
    session_count: int
    attendance: dict[str, list[int]]


class DayView(BaseModel):
    date_key: str
    offline: TrackDay
    online: TrackDay


class MonthView(BaseModel):
    year: int
    month: int
    track: Track
    entries: dict[str, dict[str, list[int]]]
