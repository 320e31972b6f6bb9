"""Roster Service — members and banned list, persisted through the LedgerStore.

Invariants:
    - Roster writes require privilege; an unprivileged write returns the current
      roster with applied=False and stores nothing
    - Deleting a member (directly or by dropping it from a bulk edit) removes
      its attendance vectors from both tracks in the same transaction
    - Ids are uuid4 strings when the client does not supply one
"""

import logging
import uuid
from dataclasses import replace

from club_ledger.core.domain_types import RecordKey
from club_ledger.core.date_keys import today_key
from club_ledger.core.errors import ResourceNotFoundError
from club_ledger.core.ledger_mutations import delete_member_entries
from club_ledger.core.ledger_snapshot import ClubState, encode_record
from club_ledger.core.mutations import changed_records
from club_ledger.core.repository_protocols import LedgerStore
from club_ledger.core.roster import (
    BannedMember, Member, add_member, ban, bulk_update_members, remove_member,
    sort_for_display, unban, update_member,
)
from club_ledger.schemas.member import (
    BannedCreate, BannedListResponse, BannedResponse, MemberCreate,
    MemberResponse, MemberRow, MemberUpdate, RosterResponse,
)

logger = logging.getLogger(__name__)


def _roster_response(state: ClubState, applied: bool) -> RosterResponse:
    return RosterResponse(
        applied=applied,
        members=[MemberResponse.from_member(m) for m in sort_for_display(state.members)],
    )


def _banned_response(state: ClubState, applied: bool) -> BannedListResponse:
    return BannedListResponse(
        applied=applied,
        banned=[BannedResponse.from_entry(b) for b in state.banned_members],
    )


class RosterService:
    def __init__(self, store: LedgerStore):
        self._store = store

    async def list_members(self) -> RosterResponse:
        return _roster_response(await self._store.load_state(), applied=True)

    async def add_member(self, body: MemberCreate, *, privileged: bool) -> RosterResponse:
        state = await self._store.load_state()
        if not privileged:
            return self._rejected(state, "add_member")
        member = Member(
            id=body.id or str(uuid.uuid4()),
            name=body.name,
            joined_at=body.joined_at,
            is_staff=body.is_staff,
            is_leader=body.is_leader,
        )
        members = add_member(state.members, member, state.banned_members)
        return await self._save(replace(state, members=members), {RecordKey.MEMBERS},
                                "add_member", member.id)

    async def update_member(
        self, member_id: str, body: MemberUpdate, *, privileged: bool,
    ) -> RosterResponse:
        state = await self._store.load_state()
        if not privileged:
            return self._rejected(state, "update_member", member_id)
        changes = body.model_dump(exclude_none=True)
        members = update_member(state.members, member_id, **changes)
        return await self._save(replace(state, members=members), {RecordKey.MEMBERS},
                                "update_member", member_id)

    async def bulk_update(
        self, rows: list[MemberRow], *, privileged: bool,
    ) -> RosterResponse:
        state = await self._store.load_state()
        if not privileged:
            return self._rejected(state, "bulk_update")
        members = bulk_update_members(state.members, [r.to_member() for r in rows])
        kept = {m.id for m in members}
        ledger = state.ledger
        for m in state.members:
            if m.id not in kept:
                ledger = delete_member_entries(ledger, m.id)
        changed = {RecordKey.MEMBERS, *changed_records(state.ledger, ledger)}
        return await self._save(replace(state, members=members, ledger=ledger), changed,
                                "bulk_update")

    async def delete_member(self, member_id: str, *, privileged: bool) -> RosterResponse:
        state = await self._store.load_state()
        if not privileged:
            return self._rejected(state, "delete_member", member_id)
        if not any(m.id == member_id for m in state.members):
            raise ResourceNotFoundError("Member", member_id)
        ledger = delete_member_entries(state.ledger, member_id)
        changed = {RecordKey.MEMBERS, *changed_records(state.ledger, ledger)}
        new_state = replace(
            state, members=remove_member(state.members, member_id), ledger=ledger,
        )
        return await self._save(new_state, changed, "delete_member", member_id)

    # --- Banned list ----------------------------------------------------------

    async def list_banned(self) -> BannedListResponse:
        return _banned_response(await self._store.load_state(), applied=True)

    async def ban(self, body: BannedCreate, *, privileged: bool) -> BannedListResponse:
        state = await self._store.load_state()
        if not privileged:
            logger.warning("Roster write rejected: ban", extra={"applied": False})
            return _banned_response(state, applied=False)
        entry = BannedMember(
            id=body.id or str(uuid.uuid4()),
            name=body.name,
            reason=body.reason,
            banned_at=body.banned_at or today_key(),
        )
        new_state = replace(state, banned_members=ban(state.banned_members, entry))
        await self._write(new_state, {RecordKey.BANNED_MEMBERS})
        logger.info(f"Banned name added: {entry.id}", extra={"applied": True})
        return _banned_response(new_state, applied=True)

    async def unban(self, entry_id: str, *, privileged: bool) -> BannedListResponse:
        state = await self._store.load_state()
        if not privileged:
            logger.warning("Roster write rejected: unban", extra={"applied": False})
            return _banned_response(state, applied=False)
        if not any(b.id == entry_id for b in state.banned_members):
            raise ResourceNotFoundError("BannedMember", entry_id)
        new_state = replace(state, banned_members=unban(state.banned_members, entry_id))
        await self._write(new_state, {RecordKey.BANNED_MEMBERS})
        logger.info(f"Banned name removed: {entry_id}", extra={"applied": True})
        return _banned_response(new_state, applied=True)

    # --- Helpers --------------------------------------------------------------

    def _rejected(
        self, state: ClubState, action: str, member_id: str | None = None,
    ) -> RosterResponse:
        logger.warning(
            f"Roster write rejected: {action}",
            extra={"member_id": member_id, "applied": False},
        )
        return _roster_response(state, applied=False)

    async def _save(
        self,
        state: ClubState,
        changed: set[RecordKey],
        action: str,
        member_id: str | None = None,
    ) -> RosterResponse:
        await self._write(state, changed)
        logger.info(
            f"Roster updated: {action}",
            extra={"member_id": member_id, "applied": True},
        )
        return _roster_response(state, applied=True)

    async def _write(self, state: ClubState, changed: set[RecordKey]) -> None:
        await self._store.replace_records(
            {key: encode_record(state, key) for key in changed},
        )
