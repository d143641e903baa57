from fastapi import APIRouter, Depends

from app.backend.client import BackendClient, current_user, get_backend
from app.core.models import User
from app.profile.store import get_profile


router = APIRouter()


@router.get("")
async def read_profile(
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    profile = get_profile(backend.db, user.id)
    return {
        "user_id": user.id,
        "email": user.email,
        "display_name": user.display_name,
        "tier": profile.tier,
        "can_author_templates": profile.can_author_templates,
    }
