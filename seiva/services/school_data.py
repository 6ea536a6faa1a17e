"""
School Data Store - the in-memory source of truth for the running app.

Holds students, transactions, calendar events and employees, applies every
mutation to memory first and then persists it through the configured
backend. Persistence is optimistic: a failed write is logged and the
in-memory change stays (the next ``refresh`` re-syncs from storage).
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Callable, List, Optional, Tuple, TypeVar

from seiva.core.exceptions import StoreNotInitializedError
from seiva.core.logging import get_logger
from seiva.persistence.base import CollectionAdapter, DataBackend
from seiva.schemas.base import unique_periods
from seiva.schemas.employee import Employee
from seiva.schemas.event import CalendarEvent
from seiva.schemas.kpi import KPIData
from seiva.schemas.student import Student
from seiva.schemas.transaction import Transaction
from seiva.services.kpi_service import compute_kpis
from seiva.services.status_classifier import StatusPolicy
from seiva.utils.time import today

logger = get_logger(__name__)

E = TypeVar("E")


def _replace_by_id(items: List[E], entity: E) -> bool:
    for i, item in enumerate(items):
        if item.id == entity.id:
            items[i] = entity
            return True
    return False


def _remove_by_id(items: List[E], entity_id: str) -> bool:
    for i, item in enumerate(items):
        if item.id == entity_id:
            del items[i]
            return True
    return False


class SchoolDataStore:
    """
    Canonical collections plus the actions that change them.

    Ordering: students, transactions and employees are newest-first; calendar
    events keep insertion order. Every action updates memory before its first
    ``await`` so readers never wait on storage.
    """

    def __init__(self, backend: DataBackend, policy: StatusPolicy, clock: Callable[[], date] = today):
        self._backend = backend
        self._policy = policy
        self._clock = clock
        self._students: List[Student] = []
        self._transactions: List[Transaction] = []
        self._events: List[CalendarEvent] = []
        self._employees: List[Employee] = []
        self._loading = True
        self._closed = False
        self._revision = 0
        self._load_generation = 0
        self._kpi_cache: Optional[Tuple[int, KPIData]] = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _ensure_ready(self) -> None:
        """Fail after close; re-resolve the current period once the month has moved on."""
        if self._closed:
            raise StoreNotInitializedError("School data store used after it was closed")
        on = self._clock()
        if self._policy.rolled_over(on):
            previous = self._policy.current_index
            self.set_policy(self._policy.for_date(on))
            logger.info(
                "Academic period rolled over",
                extra={"from_index": previous, "to_index": self._policy.current_index},
            )

    @property
    def students(self) -> Tuple[Student, ...]:
        self._ensure_ready()
        return tuple(self._students)

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        self._ensure_ready()
        return tuple(self._transactions)

    @property
    def events(self) -> Tuple[CalendarEvent, ...]:
        self._ensure_ready()
        return tuple(self._events)

    @property
    def employees(self) -> Tuple[Employee, ...]:
        self._ensure_ready()
        return tuple(self._employees)

    @property
    def loading(self) -> bool:
        """True until the first load attempt finishes, and during each refresh."""
        self._ensure_ready()
        return self._loading

    @property
    def policy(self) -> StatusPolicy:
        return self._policy

    @property
    def revision(self) -> int:
        """Bumped on every in-memory change; KPIs are cached per revision."""
        return self._revision

    @property
    def kpis(self) -> KPIData:
        self._ensure_ready()
        if self._kpi_cache is None or self._kpi_cache[0] != self._revision:
            self._kpi_cache = (
                self._revision,
                compute_kpis(tuple(self._students), tuple(self._transactions), self._policy),
            )
        return self._kpi_cache[1]

    def get_student(self, student_id: str) -> Optional[Student]:
        self._ensure_ready()
        return next((s for s in self._students if s.id == student_id), None)

    def set_policy(self, policy: StatusPolicy) -> None:
        """Swap the academic calendar (e.g. when the current period rolls over)."""
        self._policy = policy
        self._students = [self._with_derived_status(s) for s in self._students]
        self._touch()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _touch(self) -> None:
        self._revision += 1

    def _with_derived_status(self, student: Student) -> Student:
        """The one place financial_status is set: always from paid_months."""
        status = self._policy.classify(student.paid_months)
        if student.financial_status == status:
            return student
        return student.model_copy(update={"financial_status": status})

    async def _write(self, adapter: CollectionAdapter, operation: str, arg) -> bool:
        """Persist one change. Never raises; failures are logged and reported as False."""
        entity_id = arg if isinstance(arg, str) else getattr(arg, "id", None)
        extra = {"collection": adapter.name, "operation": operation, "entity_id": entity_id}
        try:
            ok = await getattr(adapter, operation)(arg)
        except Exception as exc:
            logger.error(
                f"Persistence {operation} raised on {adapter.name}: {exc}",
                extra=extra,
                exc_info=True,
            )
            return False
        if not ok:
            logger.error(f"Persistence {operation} rejected on {adapter.name}", extra=extra)
        return bool(ok)

    def _apply_student(self, student: Student) -> Student:
        student = self._with_derived_status(student)
        _replace_by_id(self._students, student)
        return student

    def _reconcile(self, tx: Transaction) -> Optional[Student]:
        """
        Merge an income's paid periods into its student. Returns the updated
        student, or None when there is nothing to do or the student is unknown.
        """
        if not tx.pays_tuition:
            return None
        student = next((s for s in self._students if s.id == tx.student_id), None)
        if student is None:
            logger.debug(
                "Payment references unknown student; skipping reconciliation",
                extra={"transaction_id": tx.id, "student_id": tx.student_id},
            )
            return None
        unknown = [p for p in tx.paid_months if not self._policy.is_known_period(p)]
        if unknown:
            logger.warning(
                "Payment covers periods outside the academic calendar; they do not count towards status",
                extra={"transaction_id": tx.id, "student_id": tx.student_id, "periods": unknown},
            )
        merged = unique_periods([*student.paid_months, *tx.paid_months])
        return self._apply_student(student.model_copy(update={"paid_months": merged}))

    # ------------------------------------------------------------------
    # Students
    # ------------------------------------------------------------------

    async def add_student(self, student: Student) -> Student:
        self._ensure_ready()
        student = self._with_derived_status(student)
        self._students.insert(0, student)
        self._touch()
        await self._write(self._backend.students, "insert", student)
        return student

    async def update_student(self, student: Student) -> Student:
        """Replace the student with the same id; order is unchanged."""
        self._ensure_ready()
        student = self._apply_student(student)
        self._touch()
        await self._write(self._backend.students, "update", student)
        return student

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def add_transaction(self, tx: Transaction) -> Transaction:
        """
        Record a transaction. An income that pays billing periods for a known
        student also marks those periods paid on the student (set union) and
        re-derives the student's financial status.
        """
        self._ensure_ready()
        self._transactions.insert(0, tx)
        reconciled = self._reconcile(tx)
        self._touch()
        await self._write(self._backend.transactions, "insert", tx)
        if reconciled is not None:
            await self._write(self._backend.students, "update", reconciled)
        return tx

    # ------------------------------------------------------------------
    # Calendar events
    # ------------------------------------------------------------------

    async def add_event(self, event: CalendarEvent) -> CalendarEvent:
        self._ensure_ready()
        self._events.append(event)
        self._touch()
        await self._write(self._backend.events, "insert", event)
        return event

    async def update_event(self, event: CalendarEvent) -> CalendarEvent:
        self._ensure_ready()
        _replace_by_id(self._events, event)
        self._touch()
        await self._write(self._backend.events, "update", event)
        return event

    async def delete_event(self, event_id: str) -> None:
        self._ensure_ready()
        _remove_by_id(self._events, event_id)
        self._touch()
        await self._write(self._backend.events, "delete", event_id)

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    async def add_employee(self, employee: Employee) -> Employee:
        self._ensure_ready()
        self._employees.insert(0, employee)
        self._touch()
        await self._write(self._backend.employees, "insert", employee)
        return employee

    async def update_employee(self, employee: Employee) -> Employee:
        self._ensure_ready()
        _replace_by_id(self._employees, employee)
        self._touch()
        await self._write(self._backend.employees, "update", employee)
        return employee

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def _load(self, adapter: CollectionAdapter) -> list:
        try:
            return list(await adapter.load_all())
        except Exception as exc:
            logger.error(
                f"Failed to load {adapter.name}: {exc}",
                extra={"collection": adapter.name, "operation": "load_all"},
                exc_info=True,
            )
            return []

    async def refresh(self) -> None:
        """
        Reload all four collections from storage, discarding memory.

        A collection that fails to load comes back empty. Calling refresh
        again while a load is in flight supersedes it: only the latest
        load's results are applied.
        """
        self._ensure_ready()
        self._load_generation += 1
        generation = self._load_generation
        self._loading = True

        students, transactions, events, employees = await asyncio.gather(
            self._load(self._backend.students),
            self._load(self._backend.transactions),
            self._load(self._backend.events),
            self._load(self._backend.employees),
        )

        if self._closed or generation != self._load_generation:
            logger.debug("Discarding superseded load", extra={"generation": generation})
            return

        self._students = [self._with_derived_status(s) for s in students]
        self._transactions = transactions
        self._events = events
        self._employees = employees
        self._loading = False
        self._touch()
        logger.info(
            "School data loaded",
            extra={
                "students": len(self._students),
                "transactions": len(self._transactions),
                "events": len(self._events),
                "employees": len(self._employees),
            },
        )

    async def close(self) -> None:
        """Dispose the backend; any later use of the store fails loudly."""
        if self._closed:
            return
        self._closed = True
        await self._backend.close()


@asynccontextmanager
async def open_school_data(backend: DataBackend, policy: StatusPolicy) -> AsyncIterator[SchoolDataStore]:
    """Construct a store, run the initial load, and close it on exit."""
    store = SchoolDataStore(backend, policy)
    await store.refresh()
    try:
        yield store
    finally:
        await store.close()
