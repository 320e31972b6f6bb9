"""Ledger — reads on the immutable two-track snapshot."""

import pytest

from club_ledger.core.domain_types import AttendanceStatus, EMPTY_VECTOR, Track
from club_ledger.core.errors import InvalidSessionCountError, InvalidSlotError
from club_ledger.core.ledger import (
    Ledger, check_session_count, check_slot, make_vector,
)
from club_ledger.core.session_defaults import DailyMetadata

A = AttendanceStatus.ATTENDED
N = AttendanceStatus.NO_SHOW


def _ledger() -> Ledger:
    return Ledger(
        offline_attendance={
            "2026-03-05": {"alice": make_vector([1, 1, 0, 0])},
            "2026-04-01": {"bob": make_vector([2])},
        },
        online_attendance={"2026-03-05": {"bob": make_vector([1])}},
        offline_metadata={"2026-03-05": DailyMetadata(session_count=2)},
    )


def test_missing_date_or_member_reads_empty_vector():
    ledger = _ledger()
    assert ledger.vector("2026-03-06", "alice", Track.OFFLINE) == EMPTY_VECTOR
    assert ledger.vector("2026-03-05", "zed", Track.OFFLINE) == EMPTY_VECTOR


def test_tracks_are_independent():
    ledger = _ledger()
    assert ledger.status("2026-03-05", "bob", 0, Track.ONLINE) == A
    assert ledger.vector("2026-03-05", "bob", Track.OFFLINE) == EMPTY_VECTOR


def test_status_rejects_out_of_range_slot():
    with pytest.raises(InvalidSlotError):
        _ledger().status("2026-03-05", "alice", 4, Track.OFFLINE)


@pytest.mark.parametrize("slot", [-1, 4, True, "1"])
def test_check_slot_never_clamps(slot):
    with pytest.raises(InvalidSlotError):
        check_slot(slot)


@pytest.mark.parametrize("count", [0, 5, False])
def test_check_session_count_never_clamps(count):
    with pytest.raises(InvalidSessionCountError):
        check_session_count(count)


def test_make_vector_pads_short_input():
    assert make_vector([2]) == (N, AttendanceStatus.UNSET, AttendanceStatus.UNSET, AttendanceStatus.UNSET)


def test_make_vector_rejects_unknown_status():
    with pytest.raises(ValueError):
        make_vector([3, 0, 0, 0])


def test_resolved_metadata_prefers_stored_count():
    ledger = _ledger()
    assert ledger.resolved_metadata("2026-03-05", Track.OFFLINE).session_count == 2
    assert ledger.resolved_metadata("2026-03-05", Track.ONLINE).session_count == 1


def test_entries_in_month_filters_and_orders_by_date():
    ledger = _ledger()
    assert list(ledger.entries_in_month(2026, 3, Track.OFFLINE)) == ["2026-03-05"]
    assert ledger.entries_in_month(2026, 5, Track.OFFLINE) == {}


def test_with_track_replaces_only_one_track():
    ledger = _ledger()
    updated = ledger.with_track(Track.ONLINE, attendance={})
    assert updated.online_attendance == {}
    assert updated.offline_attendance is ledger.offline_attendance
    assert ledger.online_attendance != {}


def test_member_ids_per_track():
    ledger = _ledger()
    assert ledger.member_ids(Track.OFFLINE) == {"alice", "bob"}
    assert ledger.member_ids(Track.ONLINE) == {"bob"}
