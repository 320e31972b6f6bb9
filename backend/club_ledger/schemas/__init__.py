"""Pydantic Schemas — HTTP request and response models.

Invariants:
    - Requests are validated here; ledger rules (slots, counts, date keys)
      are still enforced by core/ so every caller gets the same typed errors
    - Response models read core dataclasses via from_attributes

Design Decisions:
    - Separate from models/: schemas are the API contract, models are storage rows
"""
