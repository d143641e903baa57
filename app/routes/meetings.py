from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from app.backend.client import BackendClient, current_user, get_backend
from app.core.errors import ConflictError
from app.core.models import Answer, Meeting, MeetingDraft, Question, User
from app.schemas.api import AnswerSubmission, ApplyTemplateRequest
from app.services import meetings as meeting_store
from app.services import reflection
from app.services.templates import get_selectable_template


router = APIRouter()


@router.get("", response_model=List[Meeting])
async def list_meetings(
    limit: Optional[int] = Query(meeting_store.DASHBOARD_LIMIT, ge=1),
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return meeting_store.list_meetings(backend.db, user.id, limit=limit)


@router.post("", response_model=Meeting, status_code=201)
async def create_meeting(
    draft: MeetingDraft,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return meeting_store.create_meeting(backend.db, user.id, draft)


@router.get("/summary")
async def dashboard_summary(
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return meeting_store.dashboard_summary(backend.db, user.id)


@router.get("/{meeting_id}", response_model=Meeting)
async def get_meeting(
    meeting_id: str,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return meeting_store.get_meeting(backend.db, meeting_id, user.id)


@router.delete("/{meeting_id}", status_code=204)
async def delete_meeting(
    meeting_id: str,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    meeting = meeting_store.get_meeting(backend.db, meeting_id, user.id)
    meeting_store.delete_meeting(backend.db, meeting)
    return Response(status_code=204)


@router.post("/{meeting_id}/toggle-selection", response_model=Meeting)
async def toggle_selection(
    meeting_id: str,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    meeting = meeting_store.get_meeting(backend.db, meeting_id, user.id)
    return meeting_store.toggle_selection(backend.db, meeting)


@router.post("/{meeting_id}/template", response_model=List[Question])
async def apply_template(
    meeting_id: str,
    body: ApplyTemplateRequest,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    meeting = meeting_store.get_meeting(backend.db, meeting_id, user.id)
    if not meeting.is_selected:
        raise ConflictError("Select the meeting for reflection before choosing a template")
    template = get_selectable_template(backend.db, user.id, body.template_id)
    return reflection.apply_template(backend.db, meeting, template)


@router.get("/{meeting_id}/reflection")
async def get_reflection(
    meeting_id: str,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    meeting = meeting_store.get_meeting(backend.db, meeting_id, user.id)
    return reflection.reflection_view(backend.db, meeting)


@router.put("/{meeting_id}/answers/{question_id}", response_model=Answer)
async def save_answer(
    meeting_id: str,
    question_id: str,
    body: AnswerSubmission,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    meeting = meeting_store.get_meeting(backend.db, meeting_id, user.id)
    question = reflection.get_question(backend.db, meeting, question_id)
    reflection.validate_submission(question, body.answer, body.rating)
    rating = body.rating if question.type == "rating" else None
    return reflection.save_answer(backend.db, meeting, question.id, body.answer, rating)
