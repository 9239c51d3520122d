"""SQL Key-Value Store - durable string storage on SQLAlchemy with error mapping.

Invariants:
    - Every operation runs in its own short session and commits immediately
    - Every session rolls back on exception (no partial writes leak)
    - All SQLAlchemy exceptions mapped to PersistenceError (core/errors.py)
    - The kv_entries table is created on construction if missing

Design Decisions:
    - Synchronous engine: store access is never a suspension point for callers.
      Calls block the event loop for the length of one SQLite statement, which a
      single-session store accepts in exchange for intents never interleaving
    - In-memory SQLite URLs use StaticPool so every session sees the same database
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, delete, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from splaroulette.core.errors import PersistenceError
from splaroulette.db.base import Base
from splaroulette.models import KeyValueEntry

logger = logging.getLogger(__name__)

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _engine_kwargs(store_url: str) -> dict:
    if store_url in _MEMORY_URLS:
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    if store_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


class SqlKeyValueStore:
    """KeyValueStore backed by a single SQL table."""

    def __init__(self, store_url: str):
        try:
            self.engine = create_engine(store_url, **_engine_kwargs(store_url))
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Store initialization failed: {e}")
            raise PersistenceError(str(e), "initialize")
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    @contextmanager
    def session(self, operation: str, key: str | None = None) -> Iterator[Session]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except OperationalError as e:
            session.rollback()
            logger.error(f"Store operational error: {e}", extra={"store_key": key})
            raise PersistenceError("Connection or operational error", operation, key)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Store error: {e}", extra={"store_key": key})
            raise PersistenceError("Store operation failed", operation, key)
        finally:
            session.close()

    def get(self, key: str) -> str | None:
        with self.session("read", key) as db:
            entry = db.get(KeyValueEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self.session("write", key) as db:
            db.merge(KeyValueEntry(key=key, value=value))
            db.commit()

    def remove(self, key: str) -> None:
        with self.session("remove", key) as db:
            db.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
            db.commit()

    def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            with self.session("health_check") as db:
                db.execute(text("SELECT 1"))
            return True
        except PersistenceError as e:
            logger.error(f"Store health check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
