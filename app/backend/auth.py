import secrets
import uuid
from typing import Optional

from app.backend.store import Collection
from app.core.errors import AuthenticationError, ConflictError
from app.core.models import User


def bearer_token(authorization: Optional[str]) -> str:
    """Strip the ``Bearer`` scheme from an Authorization header value."""
    if not authorization:
        return ""
    value = authorization.strip()
    if value.lower().startswith("bearer "):
        return value[7:].strip()
    return value


class AuthClient:
    """Resolves access tokens to user records."""

    def __init__(self, users: Collection[User]):
        self._users = users

    def me(self, token: Optional[str]) -> User:
        if not token:
            raise AuthenticationError()
        matches = self._users.list(where={"access_token": token}, limit=1)
        if not matches:
            raise AuthenticationError()
        return matches[0]

    def register(self, email: str, display_name: Optional[str] = None, access_token: Optional[str] = None) -> User:
        if self._users.list(where={"email": email}, limit=1):
            raise ConflictError(f"User already registered: {email}")
        user = User(
            id=f"user_{uuid.uuid4().hex[:12]}",
            email=email,
            display_name=display_name,
            access_token=access_token or secrets.token_urlsafe(24),
        )
        return self._users.create(user)
