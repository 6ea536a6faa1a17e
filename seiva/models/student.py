"""Student Table"""

from sqlalchemy import Column, Float, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

from seiva.models.base import BaseModel, value_enum
from seiva.models.enums import EnrollmentStatus, FinancialStatus


class StudentRow(BaseModel):
    """
    Student record. ``financial_status`` is denormalized from ``paid_months``
    and rewritten together with it.
    """
    __tablename__ = "students"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, default="")
    avatar = Column(Text, nullable=True)
    enrollment_id = Column(String(64), nullable=False, default="", index=True)
    grade = Column(String(64), nullable=False, default="")
    balance = Column(Float, nullable=False, default=0.0)
    status = Column(value_enum(EnrollmentStatus, "enrollment_status"), nullable=False, default=EnrollmentStatus.ACTIVE)
    financial_status = Column(
        value_enum(FinancialStatus, "financial_status"),
        nullable=False,
        default=FinancialStatus.PENDING,
        index=True,
    )
    paid_months = Column(ARRAY(String), nullable=False, default=list)
    personal = Column(JSONB, nullable=False, default=dict)
    academic = Column(JSONB, nullable=False, default=dict)
    guardians = Column(JSONB, nullable=False, default=dict)
    health = Column(JSONB, nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<StudentRow {self.enrollment_id} - {self.financial_status}>"
