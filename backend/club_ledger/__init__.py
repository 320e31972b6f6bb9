"""Club Ledger — attendance ledger and statistics service for a meetup club.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
