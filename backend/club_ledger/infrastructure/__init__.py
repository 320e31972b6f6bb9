"""Infrastructure Layer — database access, persistence adapters, logging setup.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - All database errors leave this layer as DatabaseError
"""
