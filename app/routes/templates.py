from typing import List

from fastapi import APIRouter, Depends

from app.backend.client import BackendClient, current_user, get_backend
from app.core.models import Template, TemplateDraft, User
from app.services import templates as template_engine


router = APIRouter()


@router.get("", response_model=List[Template])
async def list_templates(
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return template_engine.list_templates(backend.db)


@router.get("/available", response_model=List[Template])
async def available_templates(
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return template_engine.available_templates(backend.db, user.id)


@router.get("/{template_id}", response_model=Template)
async def get_template(
    template_id: str,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return template_engine.get_selectable_template(backend.db, user.id, template_id)


@router.post("", response_model=Template, status_code=201)
async def create_template(
    draft: TemplateDraft,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return template_engine.create_template(backend.db, user.id, draft)


@router.put("/{template_id}", response_model=Template)
async def update_template(
    template_id: str,
    draft: TemplateDraft,
    user: User = Depends(current_user),
    backend: BackendClient = Depends(get_backend),
):
    return template_engine.update_template(backend.db, user.id, template_id, draft)
