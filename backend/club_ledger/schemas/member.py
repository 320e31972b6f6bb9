"""Member Schemas — roster and banned-list payloads.

Invariants:
    - Names are stripped and non-empty, at most 100 chars
    - joined_at is a YYYY-MM-DD local date key
    - previous_names is read-only: clients never send it, the roster rules keep it
"""

from pydantic import BaseModel, Field, field_validator

from club_ledger.core.date_keys import parse_date_key
from club_ledger.core.errors import InvalidDateKeyError
from club_ledger.core.roster import BannedMember, Member


def _strip_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


def _check_date(v: str, field: str) -> str:
    try:
        parse_date_key(v)
    except InvalidDateKeyError:
        raise ValueError(f"{field} must be a YYYY-MM-DD date")
    return v


class MemberCreate(BaseModel):
    """New member. The server assigns an id when none is sent."""
    id: str | None = Field(None, min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=100)
    joined_at: str
    is_staff: bool = False
    is_leader: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)

    @field_validator("joined_at")
    @classmethod
    def check_joined_at(cls, v: str) -> str:
        return _check_date(v, "joined_at")


class MemberUpdate(BaseModel):
    """Partial update; unset fields stay as stored."""
    name: str | None = Field(None, min_length=1, max_length=100)
    joined_at: str | None = None
    is_staff: bool | None = None
    is_leader: bool | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return None if v is None else _strip_name(v)

    @field_validator("joined_at")
    @classmethod
    def check_joined_at(cls, v: str | None) -> str | None:
        return None if v is None else _check_date(v, "joined_at")


class MemberRow(BaseModel):
    """Full roster row for bulk edits."""
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=100)
    joined_at: str
    is_staff: bool = False
    is_leader: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)

    @field_validator("joined_at")
    @classmethod
    def check_joined_at(cls, v: str) -> str:
        return _check_date(v, "joined_at")

    def to_member(self) -> Member:
        return Member(
            id=self.id, name=self.name, joined_at=self.joined_at,
            is_staff=self.is_staff, is_leader=self.is_leader,
        )


class MemberResponse(BaseModel):
    id: str
    name: str
    joined_at: str
    is_staff: bool
    is_leader: bool
    previous_names: list[str]

    @classmethod
    def from_member(cls, m: Member) -> "MemberResponse":
        return cls(
            id=m.id, name=m.name, joined_at=m.joined_at,
            is_staff=m.is_staff, is_leader=m.is_leader,
            previous_names=list(m.previous_names),
        )


class RosterResponse(BaseModel):
    """Roster after a write. applied is false when the caller lacks privilege."""
    applied: bool
    members: list[MemberResponse]


class BannedCreate(BaseModel):
    id: str | None = Field(None, min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=100)
    reason: str = Field("", max_length=500)
    banned_at: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)

    @field_validator("banned_at")
    @classmethod
    def check_banned_at(cls, v: str | None) -> str | None:
        return None if v is None else _check_date(v, "banned_at")


class BannedResponse(BaseModel):
    id: str
    name: str
    reason: str
    banned_at: str

    @classmethod
    def from_entry(cls, b: BannedMember) -> "BannedResponse":
        return cls(id=b.id, name=b.name, reason=b.reason, banned_at=b.banned_at)


class BannedListResponse(BaseModel):
    applied: bool
    banned: list[BannedResponse]
