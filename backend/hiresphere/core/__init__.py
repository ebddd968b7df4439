"""Core Layer — pure domain logic, no IO, no pydantic, no storage.

Invariants:
    - No module in core/ imports from services/, schemas/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (credential salts excepted)

Design Decisions:
    - Functional core separated from the stores that persist it
"""
