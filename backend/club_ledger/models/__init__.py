"""ORM Models — storage rows for the club ledger.

Invariants:
    - Imported here so Base.metadata knows every table before create_all runs
"""

from club_ledger.models.ledger_record import LedgerRecord  # noqa: F401
