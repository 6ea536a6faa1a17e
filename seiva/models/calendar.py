"""Calendar Event Table"""

from sqlalchemy import Column, DateTime, String, Text

from seiva.models.base import BaseModel


class EventRow(BaseModel):
    __tablename__ = "events"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    category = Column(String(64), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<EventRow {self.title} @ {self.start_time}>"
