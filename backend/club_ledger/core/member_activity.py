"""Member Activity — lifetime totals, last attendance and inactivity flags.

Invariants:
    - Counts only active slots, like every other aggregate
    - Last attendance looks at the offline track only
    - A member with no attendance at all is never flagged inactive
    - Members who joined in the reference month go quiet after
      NEW_MEMBER_INACTIVE_DAYS; everyone else after MEMBER_INACTIVE_DAYS
"""

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from club_ledger.core.domain_types import Track
from club_ledger.core.date_keys import month_prefix, parse_date_key
from club_ledger.core.aggregation import iter_active_counts
from club_ledger.core.ledger import Ledger
from club_ledger.core.roster import Member

NEW_MEMBER_INACTIVE_DAYS = 60
MEMBER_INACTIVE_DAYS = 120


@dataclass(frozen=True)
class MemberActivity:
    member_id: str
    total_attended: int
    total_no_show: int
    last_attended: str | None
    inactive: bool


def compute_member_activity(
    members: Sequence[Member],
    ledger: Ledger,
    today: date,
    year: int,
    month: int,
) -> list[MemberActivity]:
    """Activity row per roster member, in roster order."""
    attended: dict[str, int] = {m.id: 0 for m in members}
    no_show: dict[str, int] = {m.id: 0 for m in members}
    last_seen: dict[str, str] = {}

    for track in (Track.OFFLINE, Track.ONLINE):
        for date_key, member_id, a, n in iter_active_counts(ledger, track):
            if member_id not in attended:
                continue
            attended[member_id] += a
            no_show[member_id] += n
            if track == Track.OFFLINE and a > 0:
                if date_key > last_seen.get(member_id, ""):
                    last_seen[member_id] = date_key

    prefix = month_prefix(year, month)
    rows = []
    for m in members:
        last = last_seen.get(m.id)
        rows.append(MemberActivity(
            member_id=m.id,
            total_attended=attended[m.id],
            total_no_show=no_show[m.id],
            last_attended=last,
            inactive=_is_inactive(last, m.joined_at.startswith(prefix), today),
        ))
    return rows


def _is_inactive(last_attended: str | None, is_new: bool, today: date) -> bool:
    if last_attended is None:
        return False
    days = abs((today - parse_date_key(last_attended)).days)
    threshold = NEW_MEMBER_INACTIVE_DAYS if is_new else MEMBER_INACTIVE_DAYS
    return days >= threshold
