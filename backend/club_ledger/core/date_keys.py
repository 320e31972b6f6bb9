"""Date Keys — local-calendar YYYY-MM-DD keys and month arithmetic.

Invariants:
    - Keys are built from the local calendar day (date.today()), never from UTC
    - month arguments are 1-based (1 = January)
    - previous_month(1, y) == (12, y - 1)
"""

import calendar
import re
from datetime import date

from club_ledger.core.domain_types import DateKey
from club_ledger.core.errors import InvalidDateKeyError

_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def to_date_key(day: date) -> DateKey:
    """Format a calendar date as a ledger key."""
    return DateKey(f"{day.year:04d}-{day.month:02d}-{day.day:02d}")


def today_key() -> DateKey:
    """Key for the local calendar day."""
    return to_date_key(date.today())


def parse_date_key(value: str) -> date:
    """Parse a ledger key, raising InvalidDateKeyError on anything malformed."""
    if not isinstance(value, str) or not _DATE_KEY_RE.match(value):
        raise InvalidDateKeyError(str(value))
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDateKeyError(value)


def validate_date_key(value: str) -> DateKey:
    parse_date_key(value)
    return DateKey(value)


def month_prefix(year: int, month: int) -> str:
    """'YYYY-MM' prefix shared by every key in the month."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")
    return f"{year:04d}-{month:02d}"


def year_prefix(year: int) -> str:
    return f"{year:04d}-"


def in_month(key: str, year: int, month: int) -> bool:
    return key.startswith(month_prefix(year, month) + "-")


def in_year(key: str, year: int) -> bool:
    return key.startswith(year_prefix(year))


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Calendar month before (year, month), rolling over the year boundary."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_date_keys(year: int, month: int) -> list[DateKey]:
    """Every key of the month, in calendar order."""
    return [
        to_date_key(date(year, month, day))
        for day in range(1, days_in_month(year, month) + 1)
    ]
