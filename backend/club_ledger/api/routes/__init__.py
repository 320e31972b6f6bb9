"""Route Modules — one APIRouter per resource (ledger, members, stats, records, health).

Invariants:
    - Routes parse input, resolve privilege and call a service; nothing more
"""
