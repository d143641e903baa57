from datetime import datetime, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.backend.client import BackendClient, get_backend
from app.core.config import AppConfig
from app.core.errors import EmailDeliveryError
from app.core.models import Meeting
from app.main import app
from app.services.emailer import Emailer
from app.services.templates import seed_default_templates


class RecordingEmailer(Emailer):
    driver = "recording"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[dict] = []

    def send(self, subject: str, html: str, recipients: List[str], sender: str, plaintext: Optional[str] = None) -> Optional[str]:
        if self.fail:
            raise EmailDeliveryError("relay refused the message")
        self.sent.append(
            {"subject": subject, "html": html, "recipients": recipients, "sender": sender, "plaintext": plaintext}
        )
        return f"MSG-TEST-{len(self.sent)}"


@pytest.fixture
def emailer():
    return RecordingEmailer()


@pytest.fixture
def backend(emailer):
    backend = BackendClient.in_memory(config=AppConfig(timezone="UTC"), emailer=emailer)
    seed_default_templates(backend.db)
    return backend


@pytest.fixture
def client(backend):
    app.dependency_overrides[get_backend] = lambda: backend
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(backend):
    return backend.auth.register("ava@example.com", "Ava Chen", access_token="token-ava")


@pytest.fixture
def other_user(backend):
    return backend.auth.register("ben@example.com", "Ben Ortiz", access_token="token-ben")


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {user.access_token}"}


@pytest.fixture
def make_meeting(backend, user):
    def _make(meeting_id: str = "m1", title: str = "Sync", **fields) -> Meeting:
        values = {
            "start_time": datetime(2030, 1, 7, 15, 0, tzinfo=timezone.utc),
            "end_time": datetime(2030, 1, 7, 16, 0, tzinfo=timezone.utc),
            "user_id": user.id,
            "is_selected": True,
        }
        values.update(fields)
        return backend.db.meetings.create(Meeting(id=meeting_id, title=title, **values))

    return _make
