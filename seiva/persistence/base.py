"""
Persistence contract shared by every backend.

The school data store only ever talks to a :class:`DataBackend`, which hands
out one :class:`CollectionAdapter` per collection. Backends are free to raise
from ``load_all``; writes report success as a bool.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, List, TypeVar

from seiva.core.logging import get_logger
from seiva.schemas.employee import Employee
from seiva.schemas.event import CalendarEvent
from seiva.schemas.student import Student
from seiva.schemas.transaction import Transaction

logger = get_logger(__name__)

T = TypeVar("T")


class CollectionAdapter(ABC, Generic[T]):
    """Durable storage for one entity collection."""

    name: str = ""

    @abstractmethod
    async def load_all(self) -> List[T]:
        """Return every stored entity, in the backend's natural order."""

    @abstractmethod
    async def insert(self, entity: T) -> bool:
        ...

    @abstractmethod
    async def update(self, entity: T) -> bool:
        """Replace the stored entity with the same id. False if the id is unknown."""

    async def delete(self, entity_id: str) -> bool:
        """Remove by id. Only calendar events support deletion; other collections report False."""
        logger.warning(
            f"{self.name} does not support delete",
            extra={"collection": self.name, "entity_id": entity_id},
        )
        return False


@dataclass
class DataBackend:
    """The four collections one backend persists."""
    students: CollectionAdapter[Student]
    transactions: CollectionAdapter[Transaction]
    events: CollectionAdapter[CalendarEvent]
    employees: CollectionAdapter[Employee]

    async def close(self) -> None:
        """Release backend resources (connections, file handles)."""
