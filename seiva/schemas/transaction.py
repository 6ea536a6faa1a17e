"""Transaction Schemas"""

from datetime import date
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator

from seiva.models.enums import TransactionStatus, TransactionType
from seiva.schemas.base import EntityModel, unique_periods
from seiva.utils.ids import new_id


class Transaction(EntityModel):
    """
    Income or expense entry. ``amount`` is a magnitude; ``type`` gives the sign.

    An income carrying ``student_id`` and ``paid_months`` marks those billing
    periods paid on the student when it is added to the store.
    """
    id: str = Field(default_factory=new_id)
    date: date
    description: str = ""
    amount: float = Field(ge=0, description="Magnitude; the sign comes from type")
    type: TransactionType
    category: str = ""
    method: str = ""
    status: TransactionStatus = TransactionStatus.COMPLETED
    # Receipt or document as a self-contained encoded blob (base64 / data URL)
    attachment: Optional[str] = None
    student_id: Optional[str] = None
    paid_months: List[str] = Field(default_factory=list)

    @field_validator("student_id", mode="before")
    @classmethod
    def blank_student_is_none(cls, v: Any) -> Any:
        return v or None

    @field_validator("paid_months", mode="before")
    @classmethod
    def dedupe_paid_months(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, (list, tuple, set)):
            return unique_periods(list(v))
        return v

    @property
    def pays_tuition(self) -> bool:
        """Whether adding this transaction should update a student's paid periods."""
        return (
            self.type == TransactionType.INCOME
            and bool(self.student_id)
            and bool(self.paid_months)
        )


class TransactionSummary(BaseModel):
    """Totals over a (possibly filtered) set of transactions"""
    revenue: float = 0.0
    expenses: float = 0.0
    net: float = 0.0
    pending: float = 0.0
