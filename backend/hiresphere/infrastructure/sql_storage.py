"""SQL Key-Value Storage — durable slots in a relational table with rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - write_many commits all keys in one transaction
    - All SQLAlchemy exceptions mapped to StorageError (core/errors.py)
    - A write has been committed when the call returns

Design Decisions:
    - Synchronous engine: the stores are synchronous and run to completion per call
    - pool_pre_ping for stale connection detection on long-lived processes
    - Table created on open() via metadata.create_all: a single table needs no migrations
    - open() is idempotent: the engine (and its pool) is built once per open/close cycle
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from sqlalchemy import create_engine, delete, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.orm import Session, sessionmaker

from hiresphere.core.errors import StorageError
from hiresphere.db.base import Base
from hiresphere.models.storage_slot import StorageSlotRow

logger = logging.getLogger(__name__)


class SqlKeyValueStorage:
    """KeyValueStorage over SQLAlchemy, one row per slot."""

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    def open(self) -> None:
        """Create the engine and table. A second call on an open storage is a no-op."""
        if self.engine is not None:
            return
        engine = create_engine(self.database_url, pool_pre_ping=True)
        try:
            with self._mapped_errors("open"):
                Base.metadata.create_all(engine)
        except StorageError:
            engine.dispose()
            raise
        self.engine = engine
        self._session_factory = sessionmaker(engine, expire_on_commit=False)
        logger.info("SQL storage opened", extra={"operation": "open"})

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self._session_factory = None

    def read(self, key: str) -> str | None:
        with self.session("read") as db:
            row = db.get(StorageSlotRow, key)
            return row.value if row else None

    def write(self, key: str, value: str) -> None:
        self.write_many({key: value})

    def write_many(self, values: dict[str, str]) -> None:
        now = datetime.now(timezone.utc)
        with self.session("write") as db:
            for key, value in values.items():
                db.merge(StorageSlotRow(key=key, value=value, updated_at=now))
            db.commit()
        logger.debug(f"Wrote slot(s): {', '.join(values)}", extra={"operation": "write"})

    def delete(self, key: str) -> None:
        with self.session("delete") as db:
            db.execute(delete(StorageSlotRow).where(StorageSlotRow.key == key))
            db.commit()

    @contextmanager
    def session(self, operation: str) -> Iterator[Session]:
        """Provide session with auto-rollback on exception."""
        if self._session_factory is None:
            raise RuntimeError("SQL storage not opened")
        session = self._session_factory()
        try:
            with self._mapped_errors(operation):
                try:
                    yield session
                except SQLAlchemyError:
                    session.rollback()
                    raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            with self.session("health_check") as db:
                db.execute(text("SELECT 1"))
            return True
        except (StorageError, RuntimeError) as e:
            logger.error(f"Storage health check failed: {e}")
            return False

    @contextmanager
    def _mapped_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            logger.error(f"DB integrity error: {e}")
            raise StorageError("Integrity constraint violated", operation) from e
        except OperationalError as e:
            logger.error(f"DB operational error: {e}")
            raise StorageError("Connection or operational error", operation) from e
        except DBAPIError as e:
            logger.error(f"DB driver error: {e}")
            raise StorageError("Database driver error", operation) from e
        except SQLAlchemyError as e:
            logger.error(f"SQLAlchemy error: {e}")
            raise StorageError("Database operation failed", operation) from e
