"""Ledger Mutations — Toggle, ResetDay, ClearMonth, SetDailyMetadata, member deletion.

Invariants:
    - Inputs are never modified; untouched records are shared, not copied
    - Invalid slots/counts/date keys raise instead of clamping
"""

import pytest

from club_ledger.core.domain_types import AttendanceStatus, Track
from club_ledger.core.errors import (
    InvalidDateKeyError, InvalidMetadataError, InvalidSessionCountError,
    InvalidSlotError,
)
from club_ledger.core.ledger import Ledger, make_vector
from club_ledger.core.ledger_mutations import (
    clear_month, delete_member_entries, reset_day, set_daily_metadata,
    toggle_status,
)
from club_ledger.core.session_defaults import DailyMetadata

DAY = "2026-03-05"


def _four_slot_ledger() -> Ledger:
    return set_daily_metadata(Ledger(), DAY, Track.OFFLINE, (), (), 4)


# --- Toggle -------------------------------------------------------------------

def test_toggle_three_times_returns_to_unset():
    ledger = Ledger()
    statuses = []
    for _ in range(3):
        ledger = toggle_status(ledger, DAY, "alice", 0, Track.OFFLINE)
        statuses.append(ledger.status(DAY, "alice", 0, Track.OFFLINE))
    assert statuses == [
        AttendanceStatus.ATTENDED, AttendanceStatus.NO_SHOW, AttendanceStatus.UNSET,
    ]


def test_toggle_does_not_modify_input():
    before = Ledger()
    after = toggle_status(before, DAY, "alice", 0, Track.OFFLINE)
    assert before.offline_attendance == {}
    assert after.offline_attendance[DAY]["alice"][0] == AttendanceStatus.ATTENDED


def test_toggles_on_different_slots_commute():
    base = _four_slot_ledger()
    ab = toggle_status(toggle_status(base, DAY, "alice", 1, Track.OFFLINE), DAY, "alice", 3, Track.OFFLINE)
    ba = toggle_status(toggle_status(base, DAY, "alice", 3, Track.OFFLINE), DAY, "alice", 1, Track.OFFLINE)
    assert ab == ba


def test_toggle_touches_only_its_track():
    ledger = toggle_status(Ledger(), DAY, "alice", 0, Track.ONLINE)
    assert ledger.offline_attendance == {}
    assert ledger.status(DAY, "alice", 0, Track.ONLINE) == AttendanceStatus.ATTENDED


def test_toggle_rejects_out_of_range_slot():
    with pytest.raises(InvalidSlotError):
        toggle_status(_four_slot_ledger(), DAY, "alice", 4, Track.OFFLINE)


def test_toggle_rejects_inactive_slot():
    with pytest.raises(InvalidSlotError) as exc_info:
        toggle_status(Ledger(), DAY, "alice", 2, Track.OFFLINE)
    assert exc_info.value.context.member_id == "alice"


def test_toggle_rejects_bad_date_key():
    with pytest.raises(InvalidDateKeyError):
        toggle_status(Ledger(), "2026-13-01", "alice", 0, Track.OFFLINE)


# --- ResetDay / ClearMonth ----------------------------------------------------

def test_reset_day_removes_whole_entry_and_keeps_metadata():
    ledger = toggle_status(_four_slot_ledger(), DAY, "alice", 0, Track.OFFLINE)
    reset = reset_day(ledger, DAY, Track.OFFLINE)
    assert DAY not in reset.offline_attendance
    assert reset.offline_metadata == ledger.offline_metadata


def test_reset_day_on_absent_date_is_identity():
    ledger = Ledger()
    assert reset_day(ledger, DAY, Track.OFFLINE) is ledger


def test_clear_month_keeps_other_track_and_metadata():
    ledger = Ledger(
        offline_attendance={
            DAY: {"alice": make_vector([1])},
            "2026-04-01": {"alice": make_vector([1])},
        },
        online_attendance={DAY: {"bob": make_vector([1])}},
        offline_metadata={DAY: DailyMetadata(session_count=2)},
    )
    cleared = clear_month(ledger, 2026, 3, Track.OFFLINE)
    assert list(cleared.offline_attendance) == ["2026-04-01"]
    assert cleared.online_attendance == ledger.online_attendance
    assert cleared.offline_metadata == ledger.offline_metadata


def test_clear_month_without_track_clears_both():
    ledger = Ledger(
        offline_attendance={DAY: {"alice": make_vector([1])}},
        online_attendance={DAY: {"bob": make_vector([1])}},
    )
    cleared = clear_month(ledger, 2026, 3, None)
    assert cleared.offline_attendance == {}
    assert cleared.online_attendance == {}


def test_clear_month_rejects_month_out_of_range():
    with pytest.raises(InvalidDateKeyError):
        clear_month(Ledger(), 2026, 0, Track.OFFLINE)


# --- SetDailyMetadata ---------------------------------------------------------

def test_set_metadata_replaces_whole_entry():
    ledger = set_daily_metadata(Ledger(), DAY, Track.OFFLINE, ("A", "B"), ("Sam",), 3)
    ledger = set_daily_metadata(ledger, DAY, Track.OFFLINE, ("C",), (), 1)
    assert ledger.offline_metadata[DAY] == DailyMetadata(("C",), (), 1)


def test_shrinking_count_hides_data_without_erasing_it():
    ledger = _four_slot_ledger()
    ledger = toggle_status(ledger, DAY, "alice", 3, Track.OFFLINE)
    shrunk = set_daily_metadata(ledger, DAY, Track.OFFLINE, (), (), 1)
    assert shrunk.offline_attendance[DAY]["alice"][3] == AttendanceStatus.ATTENDED


@pytest.mark.parametrize("count", [0, 5])
def test_set_metadata_rejects_count_out_of_range(count):
    with pytest.raises(InvalidSessionCountError):
        set_daily_metadata(Ledger(), DAY, Track.OFFLINE, (), (), count)


def test_set_metadata_rejects_too_many_names():
    with pytest.raises(InvalidMetadataError) as exc_info:
        set_daily_metadata(Ledger(), DAY, Track.ONLINE, ("a",) * 5, (), 1)
    assert exc_info.value.field == "names"


# --- DeleteMember entries -----------------------------------------------------

def test_delete_member_entries_clears_both_tracks():
    ledger = Ledger(
        offline_attendance={DAY: {"alice": make_vector([1]), "bob": make_vector([1])}},
        online_attendance={"2026-03-06": {"alice": make_vector([2])}},
    )
    pruned = delete_member_entries(ledger, "alice")
    assert pruned.offline_attendance == {DAY: {"bob": make_vector([1])}}
    assert pruned.online_attendance == {"2026-03-06": {}}


def test_delete_unknown_member_is_identity():
    ledger = Ledger(offline_attendance={DAY: {"bob": make_vector([1])}})
    assert delete_member_entries(ledger, "nobody") is ledger
