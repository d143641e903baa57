from typing import Any, Dict, Optional

from app.backend.client import BackendClient
from app.core.errors import EmailDeliveryError, MeetingNotFoundError
from app.core.models import Meeting
from app.observability.logger import log_briefing, timing
from app.rendering.briefing_renderer import render_briefing_html
from app.rendering.composer import briefing_subject, compose_briefing_model
from app.rendering.plaintext import render_plaintext
from app.services.meetings import get_meeting
from app.services.reflection import list_answers, list_questions


def build_briefing(backend: BackendClient, meeting: Meeting) -> Dict[str, Any]:
    """Render subject, HTML and plaintext for a meeting's briefing."""
    db = backend.db
    context = compose_briefing_model(
        meeting,
        list_questions(db, meeting.id),
        list_answers(db, meeting.id),
        tz_name=backend.config.timezone,
    )
    return {
        "subject": briefing_subject(meeting),
        "html": render_briefing_html(context),
        "text": render_plaintext(context),
        "context": context,
    }


def send_meeting_briefing(backend: BackendClient, meeting_id: str, user_id: str, token: Optional[str]) -> Optional[str]:
    """
    Email a meeting's reflection briefing to the authenticated user.

    Args:
        backend: Store, auth and email driver
        meeting_id: Meeting to summarize
        user_id: Owner the meeting must belong to; must be the token's user
        token: Bearer token of the caller; the briefing goes to that user's email

    Returns:
        Message id reported by the email driver, if any

    Raises:
        AuthenticationError: token missing or unknown
        MeetingNotFoundError: meeting absent, or not owned by the token's user
        EmailDeliveryError: the email driver could not send
    """
    user = backend.auth.me(token)
    if user.id != user_id:
        raise MeetingNotFoundError()
    meeting = get_meeting(backend.db, meeting_id, user.id)
    briefing = build_briefing(backend, meeting)

    emailer = backend.emailer
    subject = briefing["subject"]
    recipients = [user.email]
    with timing("send_briefing") as watch:
        try:
            message_id = emailer.send(
                subject=subject,
                html=briefing["html"],
                recipients=recipients,
                sender=backend.config.default_sender,
                plaintext=briefing["text"],
            )
        except EmailDeliveryError as exc:
            log_briefing("failed", meeting.id, emailer.driver, subject, recipients, error=exc.message)
            raise

    backend.db.meetings.update(meeting.id, reminder_sent=True)
    log_briefing(
        "sent",
        meeting.id,
        emailer.driver,
        subject,
        recipients,
        message_id=message_id,
        duration_ms=watch.duration_ms,
        answers_count=len(briefing["context"]["items"]),
    )
    return message_id
