import logging
import uuid

from app.backend.store import Database
from app.core.models import utcnow
from app.profile.models import Tier, UserProfile


logger = logging.getLogger(__name__)


def get_profile(db: Database, user_id: str) -> UserProfile:
    """
    Load the profile for a user, creating a standard-tier one on first load.

    Args:
        db: Record store
        user_id: Owner of the profile

    Returns:
        UserProfile for the user
    """
    profiles = db.user_profiles.list(where={"user_id": user_id}, limit=1)
    if profiles:
        return profiles[0]

    profile = UserProfile(id=f"profile_{uuid.uuid4().hex[:12]}", user_id=user_id, tier="standard")
    logger.info(f"Created default profile for user {user_id}")
    return db.user_profiles.create(profile)


def set_tier(db: Database, user_id: str, tier: Tier) -> UserProfile:
    """Change a user's tier; upgrades are driven by billing, outside this service."""
    profile = get_profile(db, user_id)
    return db.user_profiles.update(profile.id, tier=tier, updated_at=utcnow())
