import logging
from typing import Optional

from fastapi import Depends, Header

from app.backend.auth import AuthClient, bearer_token
from app.backend.store import Database, select_database
from app.core.config import AppConfig, load_config
from app.core.models import User
from app.services.emailer import Emailer, select_emailer


logger = logging.getLogger(__name__)


class BackendClient:
    """Store, auth and email delivery for one backend project."""

    def __init__(self, db: Database, config: Optional[AppConfig] = None, emailer: Optional[Emailer] = None):
        self.config = config or AppConfig()
        self.project_id = self.config.project_id
        self.db = db
        self.auth = AuthClient(db.users)
        self._emailer = emailer

    @classmethod
    def in_memory(cls, config: Optional[AppConfig] = None, emailer: Optional[Emailer] = None) -> "BackendClient":
        return cls(Database(), config=config, emailer=emailer)

    @property
    def emailer(self) -> Emailer:
        # Selected on first send so a misconfigured driver only fails email delivery
        if self._emailer is None:
            self._emailer = select_emailer(self.config)
        return self._emailer


def create_backend(config: Optional[AppConfig] = None) -> BackendClient:
    from app.services.templates import seed_default_templates

    cfg = config or load_config()
    backend = BackendClient(select_database(cfg.store_backend, cfg.store_path), config=cfg)
    if cfg.seed_default_templates:
        seeded = seed_default_templates(backend.db)
        logger.info(f"Seeded {seeded} default templates for project {backend.project_id}")
    return backend


_backend: Optional[BackendClient] = None


def get_backend() -> BackendClient:
    global _backend
    if _backend is None:
        _backend = create_backend()
    return _backend


def reset_backend() -> None:
    global _backend
    _backend = None


def current_user(
    authorization: Optional[str] = Header(None),
    backend: BackendClient = Depends(get_backend),
) -> User:
    return backend.auth.me(bearer_token(authorization))
