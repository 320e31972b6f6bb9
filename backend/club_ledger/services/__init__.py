"""Services Layer — load state, call the pure core, persist changed records.

Invariants:
    - Services depend on the LedgerStore Protocol, never on SQLAlchemy directly
    - Privilege is decided by the caller and passed in as a flag

Design Decisions:
    - One service per resource (ledger, roster, stats, snapshot) for locality
"""
