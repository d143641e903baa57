from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from app.backend.auth import bearer_token
from app.backend.client import BackendClient, current_user, get_backend
from app.core.errors import AuthenticationError, EmailDeliveryError, NotFoundError
from app.core.models import User
from app.observability.logger import log_error
from app.schemas.briefing import BriefingPreview, BriefingRequest, BriefingResponse
from app.services.briefing import build_briefing, send_meeting_briefing
from app.services.meetings import get_meeting


router = APIRouter()


@router.post("/send-meeting-briefing")
def post_send_meeting_briefing(
    body: BriefingRequest,
    authorization: Optional[str] = Header(None),
    backend: BackendClient = Depends(get_backend),
):
    try:
        message_id = send_meeting_briefing(backend, body.meeting_id, body.user_id, bearer_token(authorization))
    except (NotFoundError, AuthenticationError):
        raise
    except EmailDeliveryError as exc:
        log_error(exc, {"route": "send-meeting-briefing", "meeting_id": body.meeting_id})
        return JSONResponse(status_code=500, content={"error": "Failed to send email"})
    except Exception as exc:
        log_error(exc, {"route": "send-meeting-briefing", "meeting_id": body.meeting_id})
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    response = BriefingResponse(message_id=message_id)
    return JSONResponse(status_code=200, content=response.model_dump(by_alias=True))


@router.get("/meetings/{meeting_id}/briefing", response_model=BriefingPreview)
async def preview_meeting_briefing(
    meeting_id: str,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    meeting = get_meeting(backend.db, meeting_id, user.id)
    briefing = build_briefing(backend, meeting)
    return BriefingPreview(subject=briefing["subject"], html=briefing["html"], text=briefing["text"])
