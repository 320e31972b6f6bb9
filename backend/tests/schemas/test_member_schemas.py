"""Member schemas — name stripping, date validation, read-only history."""

import pytest
from pydantic import ValidationError

from club_ledger.core.roster import Member
from club_ledger.schemas.member import (
    BannedCreate, MemberCreate, MemberResponse, MemberRow, MemberUpdate,
)


def test_member_create_strips_name_and_allows_missing_id():
    body = MemberCreate(name="  Alice  ", joined_at="2026-01-10")
    assert body.name == "Alice"
    assert body.id is None


def test_member_create_rejects_blank_name():
    with pytest.raises(ValidationError):
        MemberCreate(name="   ", joined_at="2026-01-10")


def test_member_create_rejects_bad_join_date():
    with pytest.raises(ValidationError):
        MemberCreate(name="Alice", joined_at="10/01/2026")


def test_member_update_dump_excludes_unset_fields():
    body = MemberUpdate(is_staff=True)
    assert body.model_dump(exclude_none=True) == {"is_staff": True}


def test_member_row_ignores_client_history():
    row = MemberRow.model_validate(
        {"id": "alice", "name": "Alice", "joined_at": "2026-01-10", "previous_names": ["x"]},
    )
    assert row.to_member().previous_names == ()


def test_member_response_lists_history():
    member = Member("alice", "Ally", "2026-01-10", previous_names=("Alice",))
    assert MemberResponse.from_member(member).previous_names == ["Alice"]


def test_banned_create_validates_date():
    with pytest.raises(ValidationError):
        BannedCreate(name="Mallory", banned_at="yesterday")
