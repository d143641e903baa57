from fastapi import APIRouter, Depends

from app.backend.client import BackendClient, current_user, get_backend
from app.core.models import NotificationSettings, User
from app.services.notifications import NotificationSettingsUpdate, get_settings, update_settings


router = APIRouter()


@router.get("/notifications", response_model=NotificationSettings)
async def get_notification_settings(
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return get_settings(backend.db, user.id)


@router.patch("/notifications", response_model=NotificationSettings)
async def patch_notification_settings(
    body: NotificationSettingsUpdate,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return update_settings(backend.db, user.id, body)
