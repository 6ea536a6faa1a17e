"""Dashboard endpoints"""

from typing import Any
from fastapi import APIRouter, Depends

from seiva.api import deps
from seiva.schemas.responses import SuccessResponse
from seiva.services.school_data import SchoolDataStore

router = APIRouter()


@router.get("/kpis", response_model=SuccessResponse)
async def get_kpis(store: SchoolDataStore = Depends(deps.get_school_data)) -> Any:
    """Totals, net balance and delinquency rate for the current data."""
    return SuccessResponse(data=store.kpis)


@router.post("/refresh", response_model=SuccessResponse)
async def refresh_data(store: SchoolDataStore = Depends(deps.get_school_data)) -> Any:
    """Reload every collection from storage, discarding in-memory state."""
    await store.refresh()
    return SuccessResponse(data=store.kpis, message="Data reloaded")
