"""Mutation dispatch — privilege gate, tagged variants and changed-record tracking."""

import pytest

from club_ledger.core.domain_types import AttendanceStatus, RecordKey, Track
from club_ledger.core.errors import InvalidSlotError
from club_ledger.core.ledger import Ledger, make_vector
from club_ledger.core.mutations import (
    ClearMonth, DeleteMember, MoveSession, ResetDay, SetDailyMetadata, Toggle,
    apply_mutation,
)

DAY = "2026-03-05"


def _ledger() -> Ledger:
    return Ledger(
        offline_attendance={DAY: {"alice": make_vector([1])}},
        online_attendance={DAY: {"alice": make_vector([2])}},
    )


def test_unprivileged_mutation_is_a_rejected_noop():
    ledger = _ledger()
    result = apply_mutation(ledger, ResetDay(DAY, Track.OFFLINE), privileged=False)
    assert result.applied is False
    assert result.reason == "unauthorized"
    assert result.ledger is ledger
    assert result.changed_records == frozenset()


def test_unprivileged_invalid_mutation_does_not_raise():
    result = apply_mutation(Ledger(), Toggle(DAY, "alice", 9), privileged=False)
    assert result.applied is False


def test_toggle_reports_only_its_attendance_record():
    result = apply_mutation(Ledger(), Toggle(DAY, "alice", 0, Track.ONLINE), privileged=True)
    assert result.applied is True
    assert result.changed_records == {RecordKey.ONLINE_ATTENDANCE}
    assert result.ledger.status(DAY, "alice", 0, Track.ONLINE) == AttendanceStatus.ATTENDED


def test_invalid_privileged_mutation_raises():
    with pytest.raises(InvalidSlotError):
        apply_mutation(Ledger(), Toggle(DAY, "alice", 4), privileged=True)


def test_noop_mutation_changes_no_records():
    result = apply_mutation(Ledger(), ResetDay(DAY), privileged=True)
    assert result.applied is True
    assert result.changed_records == frozenset()


def test_set_metadata_reports_metadata_record():
    result = apply_mutation(
        Ledger(), SetDailyMetadata(DAY, ("A",), ("Sam",), 2), privileged=True,
    )
    assert result.changed_records == {RecordKey.METADATA}


def test_move_reports_attendance_and_metadata_of_its_track():
    result = apply_mutation(_ledger(), MoveSession(DAY, 0, "2026-03-06", 1), privileged=True)
    assert result.changed_records == {RecordKey.ATTENDANCE, RecordKey.METADATA}


def test_clear_month_both_tracks():
    result = apply_mutation(_ledger(), ClearMonth(2026, 3, None), privileged=True)
    assert result.changed_records == {RecordKey.ATTENDANCE, RecordKey.ONLINE_ATTENDANCE}


def test_delete_member_touches_both_attendance_records():
    result = apply_mutation(_ledger(), DeleteMember("alice"), privileged=True)
    assert result.changed_records == {RecordKey.ATTENDANCE, RecordKey.ONLINE_ATTENDANCE}
    assert result.ledger.member_ids(Track.OFFLINE) == set()


def test_variant_kinds_are_stable():
    assert [v.kind for v in (Toggle, ResetDay, ClearMonth, SetDailyMetadata, MoveSession, DeleteMember)] == [
        "toggle", "reset_day", "clear_month", "set_metadata", "move_session", "delete_member",
    ]


def test_unsupported_mutation_type_raises_type_error():
    with pytest.raises(TypeError):
        apply_mutation(Ledger(), object(), privileged=True)  # type: ignore[arg-type]
