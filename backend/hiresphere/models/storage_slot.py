"""Storage Slot ORM — one row per durable key (account ledger, session, jobs, applications).

Invariants:
    - key is the primary key (prefixed slot name, e.g. "hiresphere_jobs")
    - value is the complete serialized snapshot for that slot, never a fragment
    - updated_at refreshed on every write

Design Decisions:
    - Text column over JSON: the snapshot codec owns the byte format, the DB stores it
      verbatim so load/dump stays byte-identical
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from hiresphere.db.base import Base


class StorageSlotRow(Base):
    __tablename__ = "storage_slots"

    key: Mapped[str] = mapped_column(String(120), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
