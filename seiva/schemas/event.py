"""Calendar Event Schemas"""

from datetime import datetime
from pydantic import Field, field_validator

from seiva.schemas.base import EntityModel
from seiva.utils.ids import new_id
from seiva.utils.time import ensure_utc


class CalendarEvent(EntityModel):
    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    start: datetime
    end: datetime
    category: str = ""
    location: str = ""

    @field_validator("start", "end")
    @classmethod
    def as_utc_instant(cls, v: datetime) -> datetime:
        """Events are absolute instants; naive input is read as UTC."""
        return ensure_utc(v)
