"""Export Table — per-day counts per member and track for a month."""

from club_ledger.core.domain_types import Track
from club_ledger.core.export_table import build_export_table
from club_ledger.core.ledger import Ledger, make_vector
from club_ledger.core.roster import Member
from club_ledger.core.session_defaults import DailyMetadata

ROSTER = (Member("alice", "Alice", "2026-01-10"), Member("bob", "Bob", "2026-01-10"))


def test_one_row_per_member_per_track_offline_first():
    table = build_export_table(ROSTER, Ledger(), 2026, 2)
    assert [(r.member_id, r.track) for r in table.rows] == [
        ("alice", Track.OFFLINE), ("alice", Track.ONLINE),
        ("bob", Track.OFFLINE), ("bob", Track.ONLINE),
    ]
    assert len(table.days) == 28
    assert all(len(r.daily_attended) == 28 for r in table.rows)


def test_daily_counts_use_active_slots_only():
    ledger = Ledger(
        offline_attendance={"2026-02-03": {"alice": make_vector([1, 1, 2, 0])}},
        offline_metadata={"2026-02-03": DailyMetadata(session_count=2)},
        online_attendance={"2026-02-04": {"alice": make_vector([2, 1])}},
    )
    rows = build_export_table(ROSTER, ledger, 2026, 2).rows
    offline, online = rows[0], rows[1]
    assert offline.daily_attended[2] == 2
    assert offline.total_attended == 2
    assert offline.total_no_show == 0
    assert online.daily_attended[3] == 0
    assert online.total_no_show == 1
