"""Member Routes — roster CRUD and banned list.

Invariants:
    - DELETE /members/{id} cascades to both attendance tracks
    - PUT /members replaces the whole roster; dropped members cascade too
    - Unprivileged writes answer 200 with applied=false
"""

from fastapi import APIRouter, Depends, status

from club_ledger.api.dependencies import get_store, is_privileged
from club_ledger.infrastructure.ledger_store import SqlLedgerStore
from club_ledger.schemas.member import (
    BannedCreate, BannedListResponse, MemberCreate, MemberRow, MemberUpdate,
    RosterResponse,
)
from club_ledger.services.roster_service import RosterService

router = APIRouter(prefix="/api/v1", tags=["members"])


@router.get("/members", response_model=RosterResponse)
async def list_members(store: SqlLedgerStore = Depends(get_store)):
    return await RosterService(store).list_members()


@router.post("/members", response_model=RosterResponse, status_code=status.HTTP_200_OK)
async def add_member(
    body: MemberCreate,
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await RosterService(store).add_member(body, privileged=privileged)


@router.put("/members", response_model=RosterResponse)
async def bulk_update_members(
    rows: list[MemberRow],
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await RosterService(store).bulk_update(rows, privileged=privileged)


@router.patch("/members/{member_id}", response_model=RosterResponse)
async def update_member(
    member_id: str,
    body: MemberUpdate,
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await RosterService(store).update_member(member_id, body, privileged=privileged)


@router.delete("/members/{member_id}", response_model=RosterResponse)
async def delete_member(
    member_id: str,
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await RosterService(store).delete_member(member_id, privileged=privileged)


@router.get("/banned", response_model=BannedListResponse)
async def list_banned(store: SqlLedgerStore = Depends(get_store)):
    return await RosterService(store).list_banned()


@router.post("/banned", response_model=BannedListResponse)
async def add_banned(
    body: BannedCreate,
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await RosterService(store).ban(body, privileged=privileged)


@router.delete("/banned/{entry_id}", response_model=BannedListResponse)
async def remove_banned(
    entry_id: str,
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await RosterService(store).unban(entry_id, privileged=privileged)
