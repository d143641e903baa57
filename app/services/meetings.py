import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from app.backend.store import Database
from app.core.errors import MeetingNotFoundError
from app.core.models import Meeting, MeetingDraft, ensure_aware, utcnow


logger = logging.getLogger(__name__)

DASHBOARD_LIMIT = 20

MeetingStatus = Literal["completed", "pending", "not_selected"]


def new_meeting_id() -> str:
    return f"meeting_{uuid.uuid4().hex[:12]}"


def create_meeting(db: Database, user_id: str, draft: MeetingDraft, **extra: Any) -> Meeting:
    meeting = Meeting(
        id=new_meeting_id(),
        title=draft.title,
        start_time=draft.start_time,
        end_time=draft.end_time,
        description=draft.description,
        location=draft.location,
        attendees=draft.attendees,
        user_id=user_id,
        is_selected=False,
        has_reflection=False,
        **extra,
    )
    return db.meetings.create(meeting)


def list_meetings(db: Database, user_id: str, limit: Optional[int] = DASHBOARD_LIMIT) -> List[Meeting]:
    return db.meetings.list(where={"user_id": user_id}, order_by={"start_time": "asc"}, limit=limit)


def get_meeting(db: Database, meeting_id: str, user_id: str) -> Meeting:
    """Fetch a meeting owned by ``user_id``; other owners' meetings look absent."""
    meetings = db.meetings.list(where={"id": meeting_id, "user_id": user_id}, limit=1)
    if not meetings:
        raise MeetingNotFoundError()
    return meetings[0]


def toggle_selection(db: Database, meeting: Meeting) -> Meeting:
    updated = db.meetings.update(meeting.id, is_selected=not meeting.is_selected)
    logger.info(f"Meeting {meeting.id} selected={updated.is_selected}")
    return updated


def delete_meeting(db: Database, meeting: Meeting) -> None:
    for answer in db.answers.list(where={"meeting_id": meeting.id}):
        db.answers.delete(answer.id)
    for question in db.questions.list(where={"meeting_id": meeting.id}):
        db.questions.delete(question.id)
    db.meetings.delete(meeting.id)


def meeting_status(meeting: Meeting) -> MeetingStatus:
    if meeting.has_reflection:
        return "completed"
    if meeting.is_selected:
        return "pending"
    return "not_selected"


def dashboard_summary(db: Database, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    current = ensure_aware(now) if now else utcnow()
    meetings = list_meetings(db, user_id)
    return {
        "upcoming": sum(1 for m in meetings if m.start_time > current),
        "selected": sum(1 for m in meetings if m.is_selected),
        "completed": sum(1 for m in meetings if m.has_reflection),
        "meetings": [
            {"id": m.id, "title": m.title, "start_time": m.start_time.isoformat(), "status": meeting_status(m)}
            for m in meetings
        ],
    }
