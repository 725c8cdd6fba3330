"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class Database(ABC):
    """Abstract key/value slot store for horadofrango.

    Each slot holds one serialized document (a whole collection). Writes
    always replace the full document.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def read_slot(self, name: str) -> Optional[str]:
        """Return the raw document stored under a slot, or None if absent."""
        pass

    @abstractmethod
    def write_slots(self, documents: Mapping[str, str]) -> None:
        """Replace several slots in a single commit.

        Either every document is stored or none is.
        """
        pass

    def write_slot(self, name: str, document: str) -> None:
        """Replace a single slot."""
        self.write_slots({name: document})

    @abstractmethod
    def list_slots(self) -> list[str]:
        """List the names of all stored slots."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Erase every slot."""
        pass
