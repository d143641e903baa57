import logging
import uuid
from typing import List

from app.backend.store import Database
from app.core.errors import ForbiddenError, TemplateNotFoundError, TierRestrictedError
from app.core.models import SYSTEM_OWNER, Template, TemplateDraft, utcnow
from app.data.default_templates import DEFAULT_TEMPLATES
from app.profile.store import get_profile


logger = logging.getLogger(__name__)

TEMPLATE_ORDER = {"is_default": "desc", "created_at": "desc"}


def list_templates(db: Database) -> List[Template]:
    """All templates, defaults first then newest first."""
    return db.templates.list(order_by=TEMPLATE_ORDER)


def available_templates(db: Database, user_id: str) -> List[Template]:
    """Templates a user can apply: the system defaults plus their own."""
    system = db.templates.list(where={"user_id": SYSTEM_OWNER, "is_default": True}, order_by={"created_at": "asc"})
    own = db.templates.list(where={"user_id": user_id}, order_by={"created_at": "desc"})
    return system + own


def get_template(db: Database, template_id: str) -> Template:
    template = db.templates.get(template_id)
    if template is None:
        raise TemplateNotFoundError()
    return template


def get_selectable_template(db: Database, user_id: str, template_id: str) -> Template:
    """Like get_template, but other users' custom templates look absent."""
    template = get_template(db, template_id)
    if not template.is_system and template.user_id != user_id:
        raise TemplateNotFoundError()
    return template


def _require_author(db: Database, user_id: str) -> None:
    profile = get_profile(db, user_id)
    if not profile.can_author_templates:
        logger.info(f"Template authoring blocked for {profile.tier} user {user_id}")
        raise TierRestrictedError()


def create_template(db: Database, user_id: str, draft: TemplateDraft) -> Template:
    _require_author(db, user_id)
    template = Template(
        id=f"template_{uuid.uuid4().hex[:12]}",
        name=draft.name,
        description=draft.description,
        questions=draft.questions,
        is_default=False,
        user_id=user_id,
    )
    created = db.templates.create(template)
    logger.info(f"Created template {created.id} with {len(created.questions)} questions")
    return created


def update_template(db: Database, user_id: str, template_id: str, draft: TemplateDraft) -> Template:
    _require_author(db, user_id)
    template = get_template(db, template_id)
    if template.is_system:
        raise ForbiddenError("System templates cannot be edited")
    if template.user_id != user_id:
        raise ForbiddenError("Only the template owner can edit it")
    # Questions already copied onto meetings keep their text
    return db.templates.update(
        template_id,
        name=draft.name,
        description=draft.description,
        questions=[spec.model_dump() for spec in draft.questions],
        updated_at=utcnow(),
    )


def seed_default_templates(db: Database) -> int:
    """Create any missing system templates; returns how many were added."""
    created = 0
    for raw in DEFAULT_TEMPLATES:
        if db.templates.get(raw["id"]) is not None:
            continue
        db.templates.create(Template(**raw, is_default=True, user_id=SYSTEM_OWNER))
        created += 1
    return created
