from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from app.calendar.types import CalendarEvent
from app.core.models import ensure_aware
from app.data.sample_calendar import SAMPLE_EVENTS


class MockCalendarProvider:
    """Stands in for Google/Outlook until OAuth is wired up."""

    def __init__(self, events: Optional[List[Dict[str, Any]]] = None) -> None:
        self._events = events if events is not None else SAMPLE_EVENTS

    def fetch_events(self, now: datetime) -> List[CalendarEvent]:
        base = ensure_aware(now)
        events: List[CalendarEvent] = []
        for e in self._events:
            start = base + timedelta(days=e.get("days_ahead", 0))
            end = start + timedelta(minutes=e.get("duration_minutes", 60))
            events.append(
                CalendarEvent(
                    id=e["id"],
                    title=e.get("title", ""),
                    start=start,
                    end=end,
                    description=e.get("description"),
                    attendees=list(e.get("attendees", [])),
                    location=e.get("location"),
                )
            )
        return events
