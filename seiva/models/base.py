"""Base Model and Column Helpers"""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.postgresql import ENUM

from seiva.database import Base
from seiva.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all tables.

    Provides:
    - client-generated string primary key (IDs are assigned before the row exists)
    - created_at timestamp, used for newest-first ordering on load
    """
    __abstract__ = True

    id = Column(String(64), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=get_utc_now, nullable=False)


def value_enum(enum_cls, name: str) -> ENUM:
    """Postgres ENUM that stores the members' values rather than their names."""
    return ENUM(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
    )
