"""Shared fixtures: in-memory backend, status policy, entity factories, HTTP client."""

import asyncio
from datetime import date
from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from seiva.config import settings
from seiva.main import create_app
from seiva.models.enums import Department, TransactionStatus, TransactionType
from seiva.persistence.base import CollectionAdapter, DataBackend
from seiva.persistence.local import create_local_backend
from seiva.schemas.employee import Employee, Salary
from seiva.schemas.event import CalendarEvent
from seiva.schemas.student import Student
from seiva.schemas.transaction import Transaction
from seiva.services.school_data import SchoolDataStore
from seiva.services.status_classifier import StatusPolicy
from seiva.utils.ids import new_id

PERIODS = ["February", "March", "April", "May", "June"]


class MemoryCollection(CollectionAdapter):
    """
    Backend double. Records every write call; ``fail_writes`` makes writes
    report failure, ``raise_on_write`` makes them raise, ``fail_load`` makes
    ``load_all`` raise. ``gate`` (an asyncio.Event) holds ``load_all`` open.
    """

    def __init__(self, name: str, deletable: bool = False):
        self.name = name
        self.deletable = deletable
        self.items: List = []
        self.calls: List[tuple] = []
        self.fail_writes = False
        self.raise_on_write = False
        self.fail_load = False
        self.gate: Optional[asyncio.Event] = None
        self.load_calls = 0
        self.closed = False

    async def load_all(self):
        self.load_calls += 1
        gate = self.gate
        snapshot = list(self.items)
        if self.fail_load:
            raise ConnectionError(f"{self.name} unavailable")
        if gate is not None:
            await gate.wait()
        return snapshot

    def _check(self, operation: str, entity_id: str) -> bool:
        self.calls.append((operation, entity_id))
        if self.raise_on_write:
            raise ConnectionError("connection reset")
        return not self.fail_writes

    async def insert(self, entity) -> bool:
        if not self._check("insert", entity.id):
            return False
        self.items.insert(0, entity)
        return True

    async def update(self, entity) -> bool:
        if not self._check("update", entity.id):
            return False
        for i, item in enumerate(self.items):
            if item.id == entity.id:
                self.items[i] = entity
                return True
        return False

    async def delete(self, entity_id: str) -> bool:
        if not self.deletable:
            return await super().delete(entity_id)
        if not self._check("delete", entity_id):
            return False
        before = len(self.items)
        self.items = [i for i in self.items if i.id != entity_id]
        return len(self.items) < before


class MemoryBackend(DataBackend):
    closed = False

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def policy() -> StatusPolicy:
    """February..June cycle with April current: February, March, April are due."""
    return StatusPolicy.build(PERIODS, current_period="April")


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend(
        students=MemoryCollection("students"),
        transactions=MemoryCollection("transactions"),
        events=MemoryCollection("events", deletable=True),
        employees=MemoryCollection("employees"),
    )


@pytest.fixture
async def store(backend: MemoryBackend, policy: StatusPolicy) -> SchoolDataStore:
    """A store that has completed its initial (empty) load."""
    store = SchoolDataStore(backend, policy)
    await store.refresh()
    return store


@pytest.fixture
def make_student():
    def _make(**overrides) -> Student:
        data = {"id": new_id(), "name": "Ana Machava", "enrollment_id": "#2026-101", "grade": "5ª Classe"}
        data.update(overrides)
        return Student(**data)
    return _make


@pytest.fixture
def make_transaction():
    def _make(**overrides) -> Transaction:
        data = {
            "id": new_id(),
            "date": date(2026, 3, 10),
            "description": "Mensalidade",
            "amount": 500.0,
            "type": TransactionType.INCOME,
            "category": "Mensalidade",
            "method": "M-Pesa",
            "status": TransactionStatus.COMPLETED,
        }
        data.update(overrides)
        return Transaction(**data)
    return _make


@pytest.fixture
def make_event():
    def _make(**overrides) -> CalendarEvent:
        data = {
            "id": new_id(),
            "title": "Reunião de Pais",
            "start": "2026-03-20T08:00:00Z",
            "end": "2026-03-20T10:00:00Z",
            "category": "meeting",
            "location": "Sala 3",
        }
        data.update(overrides)
        return CalendarEvent(**data)
    return _make


@pytest.fixture
def make_employee():
    def _make(**overrides) -> Employee:
        data = {
            "id": new_id(),
            "name": "Carlos Nhantumbo",
            "role": "Professor de Matemática",
            "department": Department.TEACHING,
            "email": "carlos@seiva.mz",
            "admission_date": date(2024, 2, 1),
            "salary": Salary(base=25000.0, currency="MZN"),
        }
        data.update(overrides)
        return Employee(**data)
    return _make


# ---------------------------------------------------------------------------
# HTTP layer
# ---------------------------------------------------------------------------

@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
async def app(tmp_path):
    """Application over a fresh local data directory, with its lifespan running."""
    application = create_app(create_local_backend(tmp_path))
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def async_client(app, api_base: str):
    transport = ASGITransport(app=app)
    client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()
