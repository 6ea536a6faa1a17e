"""Student Schemas"""

from typing import Any, Dict, List, Optional
from pydantic import Field, field_validator

from seiva.models.enums import EnrollmentStatus, FinancialStatus
from seiva.schemas.base import EntityModel, unique_periods
from seiva.utils.ids import new_id


class Student(EntityModel):
    """
    Enrolled student.

    ``financial_status`` is a cached view of ``paid_months``; the store
    re-derives it on every write, so whatever a caller passes is overridden.
    The nested personal/academic/guardians/health records are carried as-is.
    """
    id: str = Field(default_factory=new_id)
    name: str
    email: str = ""
    avatar: Optional[str] = None
    enrollment_id: str = ""
    grade: str = ""
    balance: float = 0.0
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    financial_status: FinancialStatus = FinancialStatus.PENDING
    paid_months: List[str] = Field(default_factory=list)
    personal: Dict[str, Any] = Field(default_factory=dict)
    academic: Dict[str, Any] = Field(default_factory=dict)
    guardians: Dict[str, Any] = Field(default_factory=dict)
    health: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("paid_months", mode="before")
    @classmethod
    def dedupe_paid_months(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, (list, tuple, set)):
            return unique_periods(list(v))
        return v
