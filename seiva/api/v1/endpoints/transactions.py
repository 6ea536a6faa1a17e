"""Finance endpoints"""

from datetime import date
from typing import Any, Optional
from fastapi import APIRouter, Depends

from seiva.api import deps
from seiva.schemas.responses import SuccessResponse
from seiva.schemas.transaction import Transaction
from seiva.services.kpi_service import filter_transactions, summarize_transactions, tuition_description
from seiva.services.school_data import SchoolDataStore

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def list_transactions(
    q: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    """List transactions, newest first, filtered by text and inclusive date range."""
    return SuccessResponse(data=filter_transactions(store.transactions, q, date_from, date_to))


@router.get("/summary", response_model=SuccessResponse)
async def transactions_summary(
    q: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    """Revenue, expenses, net and pending amount over the filtered transactions."""
    filtered = filter_transactions(store.transactions, q, date_from, date_to)
    return SuccessResponse(data=summarize_transactions(filtered))


@router.post("", response_model=SuccessResponse)
async def record_transaction(
    tx_in: Transaction,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    """
    Record an income or expense. A tuition income (``studentId`` +
    ``paidMonths``) also marks those months paid on the student.
    """
    if not tx_in.description and tx_in.pays_tuition:
        student = store.get_student(tx_in.student_id)
        if student:
            tx_in = tx_in.model_copy(
                update={"description": tuition_description(student.name, tx_in.paid_months)}
            )
    tx = await store.add_transaction(tx_in)
    return SuccessResponse(data=tx, message="Transaction recorded successfully")
