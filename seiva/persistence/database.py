"""
Relational backend (SQLAlchemy async).

In memory, entities use the schema attribute names; in the database the
columns follow the table conventions (``enrollment_id``, ``start_time``,
``salary_base``...). The ``*_to_values`` / ``*_from_row`` pairs below are the
only place that translation happens and must round-trip every field.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from seiva.config import Settings
from seiva.core.logging import get_logger
from seiva.database import create_engine, create_session_factory
from seiva.models.base import BaseModel as RowModel
from seiva.models.calendar import EventRow
from seiva.models.finance import TransactionRow
from seiva.models.staff import EmployeeRow
from seiva.models.student import StudentRow
from seiva.persistence.base import CollectionAdapter, DataBackend
from seiva.schemas.employee import Employee, Salary
from seiva.schemas.event import CalendarEvent
from seiva.schemas.student import Student
from seiva.schemas.transaction import Transaction

logger = get_logger(__name__)

E = TypeVar("E")


# ---------------------------------------------------------------------------
# Field mapping
# ---------------------------------------------------------------------------

def student_to_values(s: Student) -> Dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "email": s.email,
        "avatar": s.avatar,
        "enrollment_id": s.enrollment_id,
        "grade": s.grade,
        "balance": s.balance,
        "status": s.status,
        "financial_status": s.financial_status,
        "paid_months": list(s.paid_months),
        "personal": s.personal,
        "academic": s.academic,
        "guardians": s.guardians,
        "health": s.health,
    }


def student_from_row(row: StudentRow) -> Student:
    return Student(
        id=row.id,
        name=row.name,
        email=row.email or "",
        avatar=row.avatar,
        enrollment_id=row.enrollment_id or "",
        grade=row.grade or "",
        balance=row.balance or 0.0,
        status=row.status,
        financial_status=row.financial_status,
        paid_months=list(row.paid_months or []),
        personal=row.personal or {},
        academic=row.academic or {},
        guardians=row.guardians or {},
        health=row.health or {},
    )


def transaction_to_values(t: Transaction) -> Dict[str, Any]:
    return {
        "id": t.id,
        "date": t.date,
        "description": t.description,
        "amount": t.amount,
        "type": t.type,
        "category": t.category,
        "method": t.method,
        "status": t.status,
        "attachment": t.attachment,
        "student_id": t.student_id,
        "paid_months": list(t.paid_months),
    }


def transaction_from_row(row: TransactionRow) -> Transaction:
    return Transaction(
        id=row.id,
        date=row.date,
        description=row.description or "",
        amount=row.amount,
        type=row.type,
        category=row.category or "",
        method=row.method or "",
        status=row.status,
        attachment=row.attachment,
        student_id=row.student_id,
        paid_months=list(row.paid_months or []),
    )


def event_to_values(e: CalendarEvent) -> Dict[str, Any]:
    return {
        "id": e.id,
        "title": e.title,
        "description": e.description,
        "start_time": e.start,
        "end_time": e.end,
        "category": e.category,
        "location": e.location,
    }


def event_from_row(row: EventRow) -> CalendarEvent:
    return CalendarEvent(
        id=row.id,
        title=row.title,
        description=row.description or "",
        start=row.start_time,
        end=row.end_time,
        category=row.category or "",
        location=row.location or "",
    )


def employee_to_values(e: Employee) -> Dict[str, Any]:
    return {
        "id": e.id,
        "name": e.name,
        "role": e.role,
        "department": e.department,
        "email": e.email,
        "phone": e.phone,
        "avatar": e.avatar,
        "contract_type": e.contract_type,
        "admission_date": e.admission_date,
        "status": e.status,
        "salary_base": e.salary.base,
        "salary_currency": e.salary.currency,
        "personal": e.personal,
        "bank": e.bank,
    }


def employee_from_row(row: EmployeeRow) -> Employee:
    return Employee(
        id=row.id,
        name=row.name,
        role=row.role,
        department=row.department,
        email=row.email or "",
        phone=row.phone or "",
        avatar=row.avatar,
        contract_type=row.contract_type,
        admission_date=row.admission_date,
        status=row.status,
        salary=Salary(base=row.salary_base, currency=row.salary_currency),
        personal=row.personal or {},
        bank=row.bank or {},
    )


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

class SqlCollection(CollectionAdapter[E]):
    """One table behind the collection contract."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        row_cls: Type[RowModel],
        to_values: Callable[[E], Dict[str, Any]],
        from_row: Callable[[Any], E],
        order_by: Sequence[Any] = (),
        deletable: bool = False,
    ):
        self.session_factory = session_factory
        self.row_cls = row_cls
        self.to_values = to_values
        self.from_row = from_row
        self.order_by = tuple(order_by)
        self.deletable = deletable
        self.name = row_cls.__tablename__

    def _log_failure(self, operation: str, entity_id: str, exc: Exception) -> None:
        logger.error(
            f"Database {operation} failed on {self.name}: {exc}",
            extra={"collection": self.name, "operation": operation, "entity_id": entity_id},
        )

    async def load_all(self) -> List[E]:
        async with self.session_factory() as session:
            result = await session.execute(select(self.row_cls).order_by(*self.order_by))
            rows = result.scalars().all()
        return [self.from_row(r) for r in rows]

    async def insert(self, entity: E) -> bool:
        values = self.to_values(entity)
        try:
            async with self.session_factory() as session:
                session.add(self.row_cls(**values))
                await session.commit()
        except SQLAlchemyError as exc:
            self._log_failure("insert", values["id"], exc)
            return False
        return True

    async def update(self, entity: E) -> bool:
        values = self.to_values(entity)
        entity_id = values.pop("id")
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    update(self.row_cls).where(self.row_cls.id == entity_id).values(**values)
                )
                await session.commit()
        except SQLAlchemyError as exc:
            self._log_failure("update", entity_id, exc)
            return False
        return (result.rowcount or 0) > 0

    async def delete(self, entity_id: str) -> bool:
        if not self.deletable:
            return await super().delete(entity_id)
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    delete(self.row_cls).where(self.row_cls.id == entity_id)
                )
                await session.commit()
        except SQLAlchemyError as exc:
            self._log_failure("delete", entity_id, exc)
            return False
        return (result.rowcount or 0) > 0


@dataclass
class SqlDataBackend(DataBackend):
    engine: Optional[AsyncEngine] = None

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


def build_sql_backend(session_factory: async_sessionmaker, engine: Optional[AsyncEngine] = None) -> SqlDataBackend:
    """Wire the four table adapters onto one session factory."""
    return SqlDataBackend(
        students=SqlCollection(
            session_factory, StudentRow, student_to_values, student_from_row,
            order_by=[StudentRow.created_at.desc()],
        ),
        transactions=SqlCollection(
            session_factory, TransactionRow, transaction_to_values, transaction_from_row,
            order_by=[TransactionRow.date.desc(), TransactionRow.created_at.desc()],
        ),
        events=SqlCollection(
            session_factory, EventRow, event_to_values, event_from_row,
            order_by=[EventRow.created_at.asc()],
            deletable=True,
        ),
        employees=SqlCollection(
            session_factory, EmployeeRow, employee_to_values, employee_from_row,
            order_by=[EmployeeRow.created_at.desc()],
        ),
        engine=engine,
    )


def create_database_backend(settings: Settings) -> SqlDataBackend:
    """Backend that persists every collection in the configured database."""
    engine = create_engine(settings)
    logger.info("Using database backend", extra={"pool_size": settings.DB_POOL_SIZE})
    return build_sql_backend(create_session_factory(engine), engine=engine)
