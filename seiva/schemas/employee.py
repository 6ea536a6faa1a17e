"""Employee Schemas"""

from datetime import date
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from seiva.config import settings
from seiva.models.enums import ContractType, Department, EmployeeStatus
from seiva.schemas.base import EntityModel
from seiva.utils.ids import new_id


class Salary(BaseModel):
    base: float
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY)


class Employee(EntityModel):
    id: str = Field(default_factory=new_id)
    name: str
    role: str
    department: Department
    email: str = ""
    phone: str = ""
    avatar: Optional[str] = None
    contract_type: ContractType = ContractType.FULL_TIME
    admission_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    salary: Salary
    personal: Dict[str, Any] = Field(default_factory=dict)
    bank: Dict[str, Any] = Field(default_factory=dict)
