"""ORM Models — SQLAlchemy declarative models for durable storage.

Invariants:
    - All models inherit from Base (db/base.py)
    - Entities are not mapped individually; each slot row holds a whole collection

Design Decisions:
    - All models imported here so create_all sees every table
"""

from hiresphere.models.storage_slot import StorageSlotRow  # noqa: F401
