"""
Snapshot persistence.

Serializes the combined sentinel state to a single key and restores it at
startup. Each save replaces the prior value wholesale.
"""

import logging
from datetime import UTC, datetime

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from sentinel.config import settings
from sentinel.core.models import SentinelSnapshot
from sentinel.db.base import get_session_factory
from sentinel.db.tables import Snapshot
from sentinel.errors import PersistenceError

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Key-value snapshot storage backed by the `snapshots` table."""

    def __init__(self, session_factory: sessionmaker | None = None, key: str | None = None):
        self._session_factory = session_factory
        self.key = key or settings.storage_key

    def _session(self):
        factory = self._session_factory or get_session_factory()
        return factory()

    def save(self, snapshot: SentinelSnapshot) -> None:
        """
        Replace the stored snapshot.

        Raises:
            PersistenceError: The write failed
        """
        payload = snapshot.model_dump_json()
        db = self._session()
        try:
            row = db.get(Snapshot, self.key)
            if row is None:
                db.add(Snapshot(key=self.key, payload=payload))
            else:
                row.payload = payload
                row.updated_at = datetime.now(UTC)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Could not save snapshot '{self.key}': {e}") from e
        finally:
            db.close()

    def restore(self) -> SentinelSnapshot | None:
        """Read the stored snapshot. Missing or unreadable state yields None."""
        db = self._session()
        try:
            row = db.get(Snapshot, self.key)
            if row is None:
                return None
            return SentinelSnapshot.model_validate_json(row.payload)
        except (SQLAlchemyError, pydantic.ValidationError) as e:
            logger.warning(f"Ignoring unreadable snapshot '{self.key}': {e}")
            return None
        finally:
            db.close()

    def clear(self) -> None:
        db = self._session()
        try:
            db.query(Snapshot).filter(Snapshot.key == self.key).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Could not clear snapshot '{self.key}': {e}") from e
        finally:
            db.close()
