import logging
import uuid
from datetime import datetime
from typing import Iterable, List, Literal, Optional

from app.backend.store import Database
from app.calendar.provider import CalendarProvider
from app.calendar.types import CalendarEvent
from app.core.models import CalendarConnection, Meeting, MeetingDraft, utcnow
from app.services.meetings import create_meeting


logger = logging.getLogger(__name__)

CalendarVendor = Literal["google", "outlook"]


def connect_calendar(db: Database, user_id: str, provider: CalendarVendor) -> CalendarConnection:
    """Record a calendar connection; the OAuth handshake is mocked."""
    stamp = int(utcnow().timestamp() * 1000)
    connection = CalendarConnection(
        id=f"conn_{uuid.uuid4().hex[:12]}",
        user_id=user_id,
        provider=provider,
        calendar_id=f"{provider}_calendar_{stamp}",
        calendar_name=f"{'Google' if provider == 'google' else 'Outlook'} Calendar",
    )
    return db.calendar_connections.create(connection)


def list_connections(db: Database, user_id: str) -> List[CalendarConnection]:
    return db.calendar_connections.list(where={"user_id": user_id}, order_by={"created_at": "asc"})


def list_events(
    db: Database,
    user_id: str,
    provider: CalendarProvider,
    now: Optional[datetime] = None,
) -> List[CalendarEvent]:
    """Events are only offered once the user has connected a calendar."""
    if not list_connections(db, user_id):
        return []
    return provider.fetch_events(now or utcnow())


def import_events(
    db: Database,
    user_id: str,
    provider: CalendarProvider,
    event_ids: Iterable[str],
    now: Optional[datetime] = None,
) -> List[Meeting]:
    wanted = set(event_ids)
    if not wanted:
        return []

    connections = list_connections(db, user_id)
    vendor = connections[0].provider if connections else "google"
    imported: List[Meeting] = []
    for event in list_events(db, user_id, provider, now=now):
        if event.id not in wanted:
            continue
        draft = MeetingDraft(
            title=event.title,
            start_time=event.start,
            end_time=event.end,
            description=event.description or "",
            location=event.location or "",
            attendees=event.attendees,
        )
        imported.append(
            create_meeting(db, user_id, draft, calendar_event_id=event.id, calendar_provider=vendor)
        )
    logger.info(f"Imported {len(imported)} calendar events for user {user_id}")
    return imported
