from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from app.core.models import Answer, Meeting, Question, utcnow


APP_NAME = "Leadership Meeting Reflection App"
NO_ANSWERS_TEXT = "No reflection answers found for this meeting."
LOCATION_FALLBACK = "Not specified"


def format_start_time(start: datetime, tz_name: str) -> str:
    dt = start.astimezone(ZoneInfo(tz_name))
    day = str(int(dt.strftime("%d")))
    hour = str(int(dt.strftime("%I")))
    return f"{dt.strftime('%a')}, {dt.strftime('%b')} {day}, {dt.strftime('%Y')} at {hour}:{dt.strftime('%M %p')} {dt.tzname()}"


def display_answer(answer: Answer, question: Question) -> str:
    if answer.answer.strip():
        return answer.answer
    if answer.rating is not None:
        return f"{answer.rating}/{question.scale or 5}"
    return ""


def pair_answers(questions: List[Question], answers: List[Answer]) -> List[Dict[str, Any]]:
    """(question, answer) pairs in question order; answers without a question are dropped."""
    by_id = {q.id: q for q in questions}
    pairs = []
    for answer in answers:
        question = by_id.get(answer.question_id)
        if question is None:
            continue
        pairs.append({"order": question.order, "question": question.question, "answer": display_answer(answer, question)})
    pairs.sort(key=lambda p: p["order"])
    return pairs


def compose_briefing_model(
    meeting: Meeting,
    questions: List[Question],
    answers: List[Answer],
    tz_name: str = "America/New_York",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    dt = now or utcnow()
    return {
        "app_name": APP_NAME,
        "title": meeting.title,
        "start_human": format_start_time(meeting.start_time, tz_name),
        "location": meeting.location.strip() or LOCATION_FALLBACK,
        "items": pair_answers(questions, answers),
        "no_answers_text": NO_ANSWERS_TEXT,
        "current_year": dt.strftime("%Y"),
    }


def briefing_subject(meeting: Meeting) -> str:
    return f"Meeting Reflection Briefing - {meeting.title}"
