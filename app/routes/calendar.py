from typing import List

from fastapi import APIRouter, Depends

from app.backend.client import BackendClient, current_user, get_backend
from app.calendar import service as calendar_service
from app.calendar.provider import CalendarProvider, select_calendar_provider
from app.calendar.types import CalendarEvent
from app.core.models import CalendarConnection, Meeting, User
from app.schemas.api import ConnectCalendarRequest, ImportEventsRequest


router = APIRouter()


def get_calendar_provider(backend: BackendClient = Depends(get_backend)) -> CalendarProvider:
    return select_calendar_provider(backend.config.calendar_provider)


@router.get("/connections", response_model=List[CalendarConnection])
async def list_connections(
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return calendar_service.list_connections(backend.db, user.id)


@router.post("/connections", response_model=CalendarConnection, status_code=201)
async def connect_calendar(
    body: ConnectCalendarRequest,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return calendar_service.connect_calendar(backend.db, user.id, body.provider)


@router.get("/events", response_model=List[CalendarEvent])
async def list_events(
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
    provider: CalendarProvider = Depends(get_calendar_provider),
):
    return calendar_service.list_events(backend.db, user.id, provider)


@router.post("/import", response_model=List[Meeting], status_code=201)
async def import_events(
    body: ImportEventsRequest,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
    provider: CalendarProvider = Depends(get_calendar_provider),
):
    return calendar_service.import_events(backend.db, user.id, provider, body.event_ids)
