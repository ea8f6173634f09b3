from typing import Any, Callable, Dict, Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.config.settings import Settings
from src.feedback.auth import get_caller_identity
from src.feedback.endpoints import register_exception_handlers, router
from src.feedback.ledger import InMemoryLedger
from src.feedback.models import CallerIdentity


OWNER_EMAIL = "owner@chrono.app"


@pytest.fixture
def owner_email() -> Generator[str, None, None]:
    """Pin the owner address used as sender and recipient."""
    with patch.object(Settings, "OWNER_EMAIL", OWNER_EMAIL):
        yield OWNER_EMAIL


@pytest.fixture
def mock_transport(owner_email) -> Generator[MagicMock, None, None]:
    """Replace the shared mail transport with a mock whose send() is awaitable."""
    transport = MagicMock(name="MailTransport")
    transport.send = AsyncMock()
    with patch("src.feedback.endpoints.mail_transport", transport):
        yield transport


@pytest.fixture
def ledger() -> Generator[InMemoryLedger, None, None]:
    """Fresh in-memory dedup ledger for the event endpoint."""
    fresh = InMemoryLedger()
    with patch("src.feedback.endpoints.notification_ledger", fresh):
        yield fresh


@pytest.fixture
def app() -> FastAPI:
    """Router mounted on a bare app, with the error handlers registered."""
    application = FastAPI()
    register_exception_handlers(application)
    application.include_router(router)
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Client without any caller identity."""
    return TestClient(app)


@pytest.fixture
def caller() -> CallerIdentity:
    return CallerIdentity(uid="uid-123", email="alice@x.com")


@pytest.fixture
def authed_client(app: FastAPI, caller: CallerIdentity) -> Generator[TestClient, None, None]:
    """Client whose requests carry a verified identity."""
    app.dependency_overrides[get_caller_identity] = lambda: caller
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_event() -> Callable[..., Dict[str, Any]]:
    """Build a Firestore document CloudEvent (a create by default) with string fields."""

    def _make(
        doc_id: str = "doc-1",
        collection: str = "feedback",
        event_type: str = "google.cloud.firestore.document.v1.created",
        **fields: Any
    ) -> Dict[str, Any]:
        name = f"projects/chrono/databases/(default)/documents/{collection}/{doc_id}"
        return {
            "specversion": "1.0",
            "id": f"evt-{doc_id}",
            "type": event_type,
            "source": "//firestore.googleapis.com/projects/chrono/databases/(default)",
            "subject": f"documents/{collection}/{doc_id}",
            "data": {
                "value": {
                    "name": name,
                    "fields": {key: {"stringValue": value} for key, value in fields.items()},
                    "createTime": "2024-05-01T10:00:00.123456Z",
                }
            },
        }

    return _make
