from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class CalendarEvent(BaseModel):
    id: str
    title: str
    start: datetime
    end: datetime
    description: Optional[str] = None
    attendees: List[str] = []
    location: Optional[str] = None
