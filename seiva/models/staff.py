"""Employee Table"""

from sqlalchemy import Column, Date, Float, String, Text
from sqlalchemy.dialects.postgresql import JSONB

from seiva.models.base import BaseModel, value_enum
from seiva.models.enums import ContractType, Department, EmployeeStatus


class EmployeeRow(BaseModel):
    """Staff member. Salary is flattened into base amount + currency columns."""
    __tablename__ = "employees"

    name = Column(String(255), nullable=False)
    role = Column(String(128), nullable=False)
    department = Column(value_enum(Department, "department"), nullable=False, index=True)
    email = Column(String(255), nullable=False, default="")
    phone = Column(String(64), nullable=False, default="")
    avatar = Column(Text, nullable=True)
    contract_type = Column(value_enum(ContractType, "contract_type"), nullable=False)
    admission_date = Column(Date, nullable=True)
    status = Column(value_enum(EmployeeStatus, "employee_status"), nullable=False, default=EmployeeStatus.ACTIVE)
    salary_base = Column(Float, nullable=False)
    salary_currency = Column(String(8), nullable=False)
    personal = Column(JSONB, nullable=False, default=dict)
    bank = Column(JSONB, nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<EmployeeRow {self.name} - {self.department}>"
