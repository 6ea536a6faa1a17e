"""Calendar endpoints"""

from typing import Any
from fastapi import APIRouter, Depends, HTTPException

from seiva.api import deps
from seiva.schemas.event import CalendarEvent
from seiva.schemas.responses import SuccessResponse
from seiva.services.school_data import SchoolDataStore

router = APIRouter()


def _require_event(store: SchoolDataStore, event_id: str) -> None:
    if not any(e.id == event_id for e in store.events):
        raise HTTPException(status_code=404, detail="Event not found")


@router.get("", response_model=SuccessResponse)
async def list_events(store: SchoolDataStore = Depends(deps.get_school_data)) -> Any:
    return SuccessResponse(data=store.events)


@router.post("", response_model=SuccessResponse)
async def create_event(
    event_in: CalendarEvent,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    event = await store.add_event(event_in)
    return SuccessResponse(data=event, message="Event created successfully")


@router.put("/{event_id}", response_model=SuccessResponse)
async def update_event(
    event_id: str,
    event_in: CalendarEvent,
    store: SchoolDataStore = Depends(deps.get_school_data),
) -> Any:
    _require_event(store, event_id)
    event = await store.update_event(event_in.model_copy(update={"id": event_id}))
    return SuccessResponse(data=event, message="Event updated successfully")


@router.delete("/{event_id}", response_model=SuccessResponse)
async def delete_event(event_id: str, store: SchoolDataStore = Depends(deps.get_school_data)) -> Any:
    _require_event(store, event_id)
    await store.delete_event(event_id)
    return SuccessResponse(data={"id": event_id}, message="Event deleted successfully")
