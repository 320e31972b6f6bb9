"""Roster Rules — member identity, bounded name history, banned list.

Invariants:
    - previous_names holds at most MAX_NAME_HISTORY entries, most recent first
    - A name change prepends the old name; an unchanged name leaves history alone
    - Member ids are assigned by the caller and never generated here
    - Adding a member whose name is on the banned list raises BannedNameError
    - All functions return new tuples; inputs are never modified
"""

from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from club_ledger.core.domain_types import MAX_NAME_HISTORY
from club_ledger.core.date_keys import month_prefix
from club_ledger.core.errors import (
    BannedNameError, DuplicateMemberError, ResourceNotFoundError,
)

_EDITABLE_FIELDS = frozenset({"name", "joined_at", "is_staff", "is_leader"})


@dataclass(frozen=True)
class Member:
    id: str
    name: str
    joined_at: str
    is_staff: bool = False
    is_leader: bool = False
    previous_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class BannedMember:
    id: str
    name: str
    reason: str
    banned_at: str


@dataclass(frozen=True)
class RosterSummary:
    new_this_month: int
    staff_count: int
    leader_count: int
    total: int


def push_name_history(
    previous_names: Sequence[str], old_name: str,
) -> tuple[str, ...]:
    return (old_name, *previous_names)[:MAX_NAME_HISTORY]


def rename(member: Member, new_name: str) -> Member:
    if new_name == member.name:
        return member
    return replace(
        member,
        name=new_name,
        previous_names=push_name_history(member.previous_names, member.name),
    )


def is_banned(name: str, banned: Iterable[BannedMember]) -> bool:
    return any(entry.name == name for entry in banned)


def add_member(
    members: Sequence[Member], member: Member, banned: Iterable[BannedMember],
) -> tuple[Member, ...]:
    if is_banned(member.name, banned):
        raise BannedNameError(member.name)
    if any(m.id == member.id for m in members):
        raise DuplicateMemberError(member.id)
    return (*members, member)


def update_member(
    members: Sequence[Member], member_id: str, **changes: object,
) -> tuple[Member, ...]:
    """Apply field changes to one member; a new name goes through rename()."""
    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update member fields: {sorted(unknown)}")

    found = False
    updated = []
    for m in members:
        if m.id == member_id:
            found = True
            new_name = changes.get("name")
            rest = {k: v for k, v in changes.items() if k != "name"}
            m = replace(m, **rest)
            if new_name is not None:
                m = rename(m, str(new_name))
        updated.append(m)
    if not found:
        raise ResourceNotFoundError("Member", member_id)
    return tuple(updated)


def bulk_update_members(
    members: Sequence[Member], edited: Sequence[Member],
) -> tuple[Member, ...]:
    """Replace the roster with an edited copy, keeping name history honest.

    History comes from the stored member, not from the edited row, so a client
    cannot rewrite it. Members missing from `edited` are dropped.
    """
    by_id = {m.id: m for m in members}
    result = []
    for row in edited:
        original = by_id.get(row.id)
        if original is None:
            result.append(row)
            continue
        merged = replace(row, name=original.name, previous_names=original.previous_names)
        result.append(rename(merged, row.name))
    return tuple(result)


def remove_member(members: Sequence[Member], member_id: str) -> tuple[Member, ...]:
    return tuple(m for m in members if m.id != member_id)


def ban(
    banned: Sequence[BannedMember], entry: BannedMember,
) -> tuple[BannedMember, ...]:
    return (*banned, entry)


def unban(banned: Sequence[BannedMember], entry_id: str) -> tuple[BannedMember, ...]:
    return tuple(b for b in banned if b.id != entry_id)


def sort_for_display(members: Iterable[Member]) -> list[Member]:
    """Leaders first, then staff, then everyone else; by name within a group."""
    return sorted(
        members, key=lambda m: (not m.is_leader, not m.is_staff, m.name),
    )


def summarize_roster(
    members: Sequence[Member], year: int, month: int,
) -> RosterSummary:
    prefix = month_prefix(year, month)
    return RosterSummary(
        new_this_month=sum(1 for m in members if m.joined_at.startswith(prefix)),
        staff_count=sum(1 for m in members if m.is_staff),
        leader_count=sum(1 for m in members if m.is_leader),
        total=len(members),
    )
