"""Database Infrastructure — SQLAlchemy Base for the durable slot table.

Invariants:
    - One table, one row per durable slot; entities live inside the row's JSON value
"""
