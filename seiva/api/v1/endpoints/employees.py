"""Human resources endpoints"""

from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException

from seiva.api import deps
from seiva.models.enums import Department
from seiva.schemas.employee import Employee
from seiva.schemas.responses import SuccessResponse
from seiva.services.kpi_service import filter_employees
from seiva.services.school_data import SchoolDataStore

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def list_employees(
    department: Optional[Department] = None,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    return SuccessResponse(data=filter_employees(store.employees, department))


@router.post("", response_model=SuccessResponse)
async def hire_employee(
    employee_in: Employee,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    employee = await store.add_employee(employee_in)
    return SuccessResponse(data=employee, message="Employee registered successfully")


@router.put("/{employee_id}", response_model=SuccessResponse)
async def update_employee(
    employee_id: str,
    employee_in: Employee,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    if not any(e.id == employee_id for e in store.employees):
        raise HTTPException(status_code=404, detail="Employee not found")
    employee = await store.update_employee(employee_in.model_copy(update={"id": employee_id}))
    return SuccessResponse(data=employee, message="Employee updated successfully")
