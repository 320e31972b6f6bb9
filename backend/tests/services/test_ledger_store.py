"""SQL Ledger Store — whole-record upserts with per-record versions."""

from club_ledger.core.domain_types import RecordKey
from club_ledger.core.ledger_snapshot import ClubState


async def test_empty_store_loads_default_state(store):
    assert await store.load_records() == {}
    assert await store.load_state() == ClubState()


async def test_first_write_creates_version_one(store):
    versions = await store.replace_records({RecordKey.CLUB_LINK: "https://example.org"})
    assert versions == {RecordKey.CLUB_LINK: 1}
    record = await store.load_record(RecordKey.CLUB_LINK)
    assert record.payload == "https://example.org"
    assert record.version == 1


async def test_each_write_bumps_version(store):
    await store.replace_records({RecordKey.CLUB_NOTICE: "a"})
    await store.replace_records({RecordKey.CLUB_NOTICE: "b"})
    versions = await store.replace_records({
        RecordKey.CLUB_NOTICE: "c", RecordKey.CLUB_LINK: "x",
    })
    assert versions == {RecordKey.CLUB_NOTICE: 3, RecordKey.CLUB_LINK: 1}


async def test_load_state_decodes_stored_records(store):
    await store.replace_records({
        RecordKey.ATTENDANCE: {"2026-03-05": {"alice": [1, 0, 0, 0]}},
        RecordKey.MEMBERS: [{"id": "alice", "name": "Alice", "joinedAt": "2026-01-10"}],
    })
    state = await store.load_state()
    assert state.members[0].name == "Alice"
    assert "alice" in state.ledger.offline_attendance["2026-03-05"]


async def test_empty_batch_writes_nothing(store):
    assert await store.replace_records({}) == {}
    assert await store.load_records() == {}
