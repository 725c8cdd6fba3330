"""Generic SQLAlchemy database implementation."""

import logging
from typing import Mapping, Optional
from sqlalchemy.orm import Session

from horadofrango.database.base import Database
from horadofrango.database.models import Slot, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def read_slot(self, name: str) -> Optional[str]:
        """Return the raw document stored under a slot, or None if absent."""
        session = self._get_session()
        slot = session.query(Slot).filter(Slot.name == name).first()
        if slot is None:
            return None
        return slot.document

    def write_slots(self, documents: Mapping[str, str]) -> None:
        """Replace several slots in a single commit."""
        session = self._get_session()
        try:
            for name, document in documents.items():
                slot = session.query(Slot).filter(Slot.name == name).first()
                if slot is None:
                    session.add(Slot(name=name, document=document))
                else:
                    slot.document = document
            session.commit()
        except Exception:
            session.rollback()
            raise
        logger.debug("Saved slots: %s", ", ".join(documents))

    def list_slots(self) -> list[str]:
        """List the names of all stored slots."""
        session = self._get_session()
        return [slot.name for slot in session.query(Slot).order_by(Slot.name).all()]

    def clear(self) -> None:
        """Erase every slot."""
        session = self._get_session()
        try:
            deleted = session.query(Slot).delete()
            session.commit()
        except Exception:
            session.rollback()
            raise
        logger.info("Cleared %d storage slots", deleted)
