from datetime import datetime
from typing import List, Protocol

from app.calendar.types import CalendarEvent


class CalendarProvider(Protocol):
    def fetch_events(self, now: datetime) -> List[CalendarEvent]:
        """
        Fetch upcoming calendar events relative to ``now``.

        All times must be timezone-aware.
        """
        ...


def select_calendar_provider(name: str = "mock") -> CalendarProvider:
    """Factory function to select calendar provider based on CALENDAR_PROVIDER."""
    if name == "mock":
        from app.calendar.mock_provider import MockCalendarProvider
        return MockCalendarProvider()
    raise ValueError(f"Unsupported CALENDAR_PROVIDER: {name}")
