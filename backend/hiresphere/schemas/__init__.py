"""Pydantic Schemas — entity models, operation inputs, and durable snapshots.

Invariants:
    - Schemas validate at every boundary (operation input, stored slot, API body)
    - Domain types from core/ used for enum and id fields

Design Decisions:
    - Separate from models: schemas are data contracts, models are persistence
"""
