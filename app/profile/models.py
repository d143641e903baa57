from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.core.models import utcnow


Tier = Literal["standard", "pro"]


class UserProfile(BaseModel):
    """Per-user profile row carrying the entitlement tier."""

    id: str
    user_id: str
    tier: Tier = "standard"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def can_author_templates(self) -> bool:
        return self.tier == "pro"
