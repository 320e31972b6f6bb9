"""Database Base — declarative Base and naming convention for ORM tables.

Invariants:
    - Engines and sessions live in infrastructure/database.py, not here
"""
