import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, Field

from app.backend.store import Database
from app.core.models import Meeting, NotificationSettings, utcnow


logger = logging.getLogger(__name__)


class NotificationSettingsUpdate(BaseModel):
    email_enabled: Optional[bool] = None
    briefing_minutes_before: Optional[int] = Field(None, ge=0)
    reminder_enabled: Optional[bool] = None
    reminder_hours_before: Optional[int] = Field(None, ge=0)


def get_settings(db: Database, user_id: str) -> NotificationSettings:
    """Load the user's settings, creating the defaults on first load."""
    existing = db.notification_settings.list(where={"user_id": user_id}, limit=1)
    if existing:
        return existing[0]
    settings = NotificationSettings(id=f"settings_{uuid.uuid4().hex[:12]}", user_id=user_id)
    logger.info(f"Created default notification settings for user {user_id}")
    return db.notification_settings.create(settings)


def update_settings(db: Database, user_id: str, update: NotificationSettingsUpdate) -> NotificationSettings:
    settings = get_settings(db, user_id)
    changes = update.model_dump(exclude_none=True)
    if not changes:
        return settings
    return db.notification_settings.update(settings.id, **changes, updated_at=utcnow())


def briefing_send_time(meeting: Meeting, settings: NotificationSettings) -> Optional[datetime]:
    """When the pre-meeting briefing is due, or None when email briefings are off."""
    if not settings.email_enabled:
        return None
    return meeting.start_time - timedelta(minutes=settings.briefing_minutes_before)


def reminder_time(meeting: Meeting, settings: NotificationSettings) -> Optional[datetime]:
    """When the reflection reminder is due, or None when reminders are off."""
    if not settings.reminder_enabled:
        return None
    return meeting.start_time - timedelta(hours=settings.reminder_hours_before)
