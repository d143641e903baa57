"""
Reflection workflow: copy a template's questions onto a meeting and record
the owner's answers.

Materialized questions are copies, not references. Their ids are derived
from the meeting and the 1-based position, so re-running an interrupted
application issues the same creates and only fills the gaps.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from app.backend.store import Database
from app.core.errors import ConflictError, QuestionNotFoundError, ValidationFailedError
from app.core.models import Answer, Meeting, Question, Template, utcnow
from app.observability.logger import log_info


logger = logging.getLogger(__name__)


def question_id_for(meeting_id: str, order: int) -> str:
    return f"question_{meeting_id}_{order}"


def apply_template(db: Database, meeting: Meeting, template: Template) -> List[Question]:
    """
    Materialize every question spec of ``template`` on ``meeting``.

    Args:
        db: Record store
        meeting: Target meeting, already checked for ownership
        template: Template to copy from

    Returns:
        The meeting's questions in order

    Raises:
        ConflictError: the meeting already uses a different template
    """
    if meeting.template_id and meeting.template_id != template.id:
        raise ConflictError("A template has already been applied to this meeting")

    if meeting.template_id != template.id:
        db.meetings.update(meeting.id, template_id=template.id)

    created = 0
    for index, spec in enumerate(template.questions):
        order = index + 1
        question_id = question_id_for(meeting.id, order)
        if db.questions.get(question_id) is not None:
            continue
        db.questions.create(
            Question(
                id=question_id,
                meeting_id=meeting.id,
                question=spec.question,
                type=spec.type,
                options=list(spec.options) if spec.type == "multiple_choice" else None,
                scale=spec.scale if spec.type == "rating" else None,
                is_required=spec.required,
                order=order,
                user_id=meeting.user_id,
            )
        )
        created += 1

    log_info("template applied", {"meeting_id": meeting.id, "template_id": template.id, "created": created})
    return list_questions(db, meeting.id)


def list_questions(db: Database, meeting_id: str) -> List[Question]:
    return db.questions.list(where={"meeting_id": meeting_id}, order_by={"order": "asc"})


def list_answers(db: Database, meeting_id: str) -> List[Answer]:
    return db.answers.list(where={"meeting_id": meeting_id}, order_by={"created_at": "asc"})


def get_question(db: Database, meeting: Meeting, question_id: str) -> Question:
    question = db.questions.get(question_id)
    if question is None or question.meeting_id != meeting.id:
        raise QuestionNotFoundError()
    return question


def validate_submission(question: Question, answer: str, rating: Optional[int]) -> None:
    """Checks made before an answer is accepted from a client."""
    if question.type == "rating":
        if rating is None:
            raise ValidationFailedError("Choose a rating before saving")
        scale = question.scale or 5
        if not 1 <= rating <= scale:
            raise ValidationFailedError(f"Rating must be between 1 and {scale}")
        return
    if not answer.strip():
        raise ValidationFailedError("Answer text is required")
    if question.type == "multiple_choice" and answer not in (question.options or []):
        raise ValidationFailedError("Answer must be one of the question's options")


def save_answer(
    db: Database,
    meeting: Meeting,
    question_id: str,
    answer: str,
    rating: Optional[int] = None,
) -> Answer:
    """Create or update the single answer for (question, meeting), then flag the meeting."""
    existing = db.answers.list(where={"question_id": question_id, "meeting_id": meeting.id}, limit=1)
    if existing:
        saved = db.answers.update(existing[0].id, answer=answer, rating=rating, updated_at=utcnow())
    else:
        saved = db.answers.create(
            Answer(
                id=f"answer_{uuid.uuid4().hex[:12]}",
                question_id=question_id,
                meeting_id=meeting.id,
                answer=answer,
                rating=rating,
                user_id=meeting.user_id,
            )
        )

    db.meetings.update(meeting.id, has_reflection=True)
    return saved


def reflection_view(db: Database, meeting: Meeting) -> Dict[str, Any]:
    """Questions in order, each paired with its answer if one was saved."""
    answers = {a.question_id: a for a in list_answers(db, meeting.id)}
    items = []
    for question in list_questions(db, meeting.id):
        answer = answers.get(question.id)
        items.append(
            {
                "question": question.model_dump(mode="json"),
                "answer": answer.model_dump(mode="json") if answer else None,
            }
        )
    stored = db.meetings.get(meeting.id)
    return {"meeting_id": meeting.id, "template_id": stored.template_id if stored else None, "items": items}
