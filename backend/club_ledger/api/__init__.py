"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (CSV export aside)

Design Decisions:
    - Thin routes delegate to services; services wrap the pure core
"""
