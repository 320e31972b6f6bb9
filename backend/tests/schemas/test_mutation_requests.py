"""Mutation requests — discriminated union on `kind` and mapping to core variants.

Invariants:
    - Unknown kinds and missing fields fail pydantic validation
    - Each request converts to exactly one core mutation dataclass
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from club_ledger.core.domain_types import Track
from club_ledger.core.mutations import (
    ClearMonth, DeleteMember, MoveSession, SetDailyMetadata, Toggle,
)
from club_ledger.schemas.ledger import MutationRequest

adapter = TypeAdapter(MutationRequest)


def test_toggle_request_defaults_to_offline_track():
    request = adapter.validate_python(
        {"kind": "toggle", "date_key": "2026-03-05", "member_id": "alice", "slot": 1},
    )
    assert request.to_mutation() == Toggle("2026-03-05", "alice", 1, Track.OFFLINE)


def test_set_metadata_request_converts_lists_to_tuples():
    request = adapter.validate_python({
        "kind": "set_metadata", "date_key": "2026-03-05", "track": "online",
        "names": ["A", "B"], "hosts": ["Sam"], "session_count": 2,
    })
    assert request.to_mutation() == SetDailyMetadata(
        "2026-03-05", ("A", "B"), ("Sam",), 2, Track.ONLINE,
    )


def test_clear_month_accepts_null_track_for_both():
    request = adapter.validate_python(
        {"kind": "clear_month", "year": 2026, "month": 3, "track": None},
    )
    assert request.to_mutation() == ClearMonth(2026, 3, None)


def test_move_and_delete_requests():
    move = adapter.validate_python({
        "kind": "move_session", "source_date": "2026-03-05", "source_slot": 0,
        "target_date": "2026-03-12", "target_slot": 2,
    })
    assert move.to_mutation() == MoveSession("2026-03-05", 0, "2026-03-12", 2)
    delete = adapter.validate_python({"kind": "delete_member", "member_id": "alice"})
    assert delete.to_mutation() == DeleteMember("alice")


def test_unknown_kind_is_rejected():
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "explode", "date_key": "2026-03-05"})


def test_missing_field_is_rejected():
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "toggle", "date_key": "2026-03-05", "slot": 0})


def test_unknown_track_is_rejected():
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "reset_day", "date_key": "2026-03-05", "track": "hybrid"})


@pytest.mark.parametrize("field, value", [
    ("slot", True),
    ("slot", "1"),
])
def test_toggle_slot_must_be_a_real_int(field, value):
    with pytest.raises(ValidationError):
        adapter.validate_python({
            "kind": "toggle", "date_key": "2026-03-05", "member_id": "alice", field: value,
        })


def test_move_slots_and_session_count_reject_booleans():
    with pytest.raises(ValidationError):
        adapter.validate_python({
            "kind": "move_session", "source_date": "2026-03-05", "source_slot": False,
            "target_date": "2026-03-12", "target_slot": 2,
        })
    with pytest.raises(ValidationError):
        adapter.validate_python(
            {"kind": "set_metadata", "date_key": "2026-03-05", "session_count": True},
        )
