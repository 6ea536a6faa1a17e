"""Student endpoints"""

from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException

from seiva.api import deps
from seiva.schemas.responses import SuccessResponse
from seiva.schemas.student import Student
from seiva.services.kpi_service import new_enrollments_in_month, search_students
from seiva.services.school_data import SchoolDataStore
from seiva.utils.time import today

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def list_students(
    q: Optional[str] = None,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    """List students, newest first. ``q`` matches name, enrollment ID or grade."""
    return SuccessResponse(data=search_students(store.students, q))


@router.get("/stats", response_model=SuccessResponse)
async def student_stats(store: SchoolDataStore = Depends(deps.get_school_data)) -> Any:
    students = store.students
    return SuccessResponse(
        data={
            "total": len(students),
            "newThisMonth": new_enrollments_in_month(students, today()),
        }
    )


@router.get("/{student_id}", response_model=SuccessResponse)
async def get_student(student_id: str, store: SchoolDataStore = Depends(deps.get_school_data)) -> Any:
    student = store.get_student(student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return SuccessResponse(data=student)


@router.post("", response_model=SuccessResponse)
async def enroll_student(
    student_in: Student,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    """Enroll a student. Financial status is derived from ``paidMonths``."""
    student = await store.add_student(student_in)
    return SuccessResponse(data=student, message="Student enrolled successfully")


@router.put("/{student_id}", response_model=SuccessResponse)
async def update_student(
    student_id: str,
    student_in: Student,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    """Replace a student record."""
    if not store.get_student(student_id):
        raise HTTPException(status_code=404, detail="Student not found")
    student = await store.update_student(student_in.model_copy(update={"id": student_id}))
    return SuccessResponse(data=student, message="Student updated successfully")
